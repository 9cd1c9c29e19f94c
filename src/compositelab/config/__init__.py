"""Centralized configuration and registries."""

from compositelab.config.template_env import load_template_environment

__all__ = ["load_template_environment"]
