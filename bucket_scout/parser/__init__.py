# File: bucket_scout/parser/__init__.py
"""bucket_scout.parser: parsing of provider responses."""

from .s3_parser import MalformedResponse, classify, list_keys

__all__ = ["MalformedResponse", "classify", "list_keys"]
