from rest_client.deserializers.base import WILDCARD, Deserializer
from rest_client.deserializers.json_deserializer import JsonDeserializer
from rest_client.deserializers.registry import DeserializerRegistry, normalize_content_type
from rest_client.deserializers.xml_deserializer import XmlDeserializer

__all__ = [
    "WILDCARD",
    "Deserializer",
    "DeserializerRegistry",
    "JsonDeserializer",
    "XmlDeserializer",
    "normalize_content_type",
]
