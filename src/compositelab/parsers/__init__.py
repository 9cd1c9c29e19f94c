"""Parsers for catalog index and material record documents."""

from compositelab.parsers.manifest_parser import find_record_location, parse_manifest, rewrite_location
from compositelab.parsers.record_parser import RecordParser, record_to_dict

__all__ = ["RecordParser", "find_record_location", "parse_manifest", "record_to_dict", "rewrite_location"]
