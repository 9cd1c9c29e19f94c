"""
Load the jinja2 environment holding the catalog's HTML templates.

Templates live in the ``templates`` directory next to this module and are
rendered with autoescaping on, so record text is inserted as text unless a
helper explicitly returns ``Markup``.
"""

from functools import lru_cache

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape


@lru_cache(maxsize=1)
def load_template_environment() -> Environment:
    """
    Build (once) the shared template environment.

    Returns
    -------
    jinja2.Environment
        Environment with autoescaping for ``.html`` templates and strict undefined variables.
    """
    return Environment(
        loader=PackageLoader("compositelab", "config/templates"),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
