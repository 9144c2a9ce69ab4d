"""Types for the host tool's JSON configuration document."""

from typing import Any

from pydantic import JsonValue, TypeAdapter

# Insertion-ordered JSON object; nested values are arbitrary JSON.
ConfigDocument = dict[str, Any]

_CONFIG_DOCUMENT_ADAPTER: TypeAdapter[dict[str, JsonValue]] = TypeAdapter(dict[str, JsonValue])


def parse_config_document(json_str: str) -> ConfigDocument:
    """Parse JSON text into a ConfigDocument.

    Raises:
        pydantic.ValidationError: If the text is not JSON or the top level
            is not an object
    """
    return _CONFIG_DOCUMENT_ADAPTER.validate_json(json_str)


def validate_config_document(data: object) -> ConfigDocument:
    """Validate an already-decoded value as a ConfigDocument."""
    return _CONFIG_DOCUMENT_ADAPTER.validate_python(data)
