import json
from typing import Any

from rest_client.core.exceptions import DeserializationError
from rest_client.deserializers.base import materialize, parse_dates, response_text
from rest_client.request_execution.models import RestResponse


class JsonDeserializer:
    """
    Decode JSON response content and validate it into the requested type.
    • root_element: select a top-level key before validation
    • date_format: strptime format for values typed as datetime or date
    • namespace: ignored for JSON
    """

    def deserialize(
        self,
        response: RestResponse,
        response_type: Any,
        *,
        root_element: str | None = None,
        date_format: str | None = None,
        namespace: str | None = None,
    ) -> Any:
        text = response_text(response)
        if not text.strip():
            return None

        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise DeserializationError(f"Invalid JSON content: {e}", response.content_type) from e

        if root_element:
            payload = self._select_root(payload, root_element)

        if date_format:
            payload = parse_dates(payload, date_format, response_type)

        return materialize(payload, response_type)

    @staticmethod
    def _select_root(payload: Any, root_element: str) -> Any:
        if isinstance(payload, dict):
            if root_element in payload:
                return payload[root_element]
            for key, value in payload.items():
                if key.lower() == root_element.lower():
                    return value

        raise DeserializationError(f"Root element '{root_element}' not found in JSON content")
