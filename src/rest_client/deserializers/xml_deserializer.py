import xml.etree.ElementTree as ET
from typing import Any

from rest_client.core.exceptions import DeserializationError
from rest_client.deserializers.base import materialize, parse_dates, response_text
from rest_client.request_execution.models import RestResponse


class XmlDeserializer:
    """
    Convert XML response content into nested dicts, then validate into the
    requested type. Repeated child elements become lists and attributes are
    merged in as keys. With a `namespace` hint only that namespace is
    stripped from tag names, otherwise every namespace is.
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
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise DeserializationError(f"Invalid XML content: {e}", response.content_type) from e

        if root_element:
            root = self._find_root(root, root_element, namespace)

        payload = self._to_python(root, namespace)

        if date_format:
            payload = parse_dates(payload, date_format, response_type)

        return materialize(payload, response_type)

    @staticmethod
    def _local_name(tag: str, namespace: str | None) -> str:
        if not tag.startswith("{"):
            return tag
        uri, _, local = tag[1:].partition("}")
        if namespace is None or uri == namespace:
            return local
        return tag

    def _find_root(self, root: ET.Element, root_element: str, namespace: str | None) -> ET.Element:
        for element in root.iter():
            if self._local_name(element.tag, namespace).lower() == root_element.lower():
                return element

        raise DeserializationError(f"Root element '{root_element}' not found in XML content")

    def _to_python(self, element: ET.Element, namespace: str | None) -> Any:
        children = list(element)
        text = (element.text or "").strip()

        if not children and not element.attrib:
            return text

        result: dict[str, Any] = {}
        for key, value in element.attrib.items():
            result[self._local_name(key, namespace)] = value

        for child in children:
            name = self._local_name(child.tag, namespace)
            value = self._to_python(child, namespace)
            if name in result:
                existing = result[name]
                if not isinstance(existing, list):
                    result[name] = [existing]
                result[name].append(value)
            else:
                result[name] = value

        if text and not children:
            result["value"] = text

        return result
