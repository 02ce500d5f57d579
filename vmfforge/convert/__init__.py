"""Structured-data conversion for VMF documents."""

from vmfforge.convert.structured import from_data, from_json, to_data, to_json

__all__ = ["from_data", "from_json", "to_data", "to_json"]
