from typing import Any
from urllib.parse import quote


def string_value(value: Any) -> str:
    """
    Render a parameter value the way it is sent on the wire.
    None becomes an empty string, booleans are lower-cased, bytes are decoded.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def string_map(d: dict[str, Any] | None) -> dict[str, str]:
    """
    A helper method to map all key/value pairs in a dictionary to string.
    """
    if not d:
        return {}
    return {str(k): string_value(v) for k, v in d.items()}


def url_encode(value: Any) -> str:
    return quote(string_value(value), safe="")
