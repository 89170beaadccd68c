import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from rest_client.deserializers.base import WILDCARD, Deserializer


def normalize_content_type(content_type: str | None) -> str:
    """Drop media type parameters (e.g. '; charset=utf-8') and normalize case."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


@dataclass(frozen=True)
class _Snapshot:
    handlers: Mapping[str, Deserializer]
    accept_types: tuple[str, ...]


class DeserializerRegistry:
    """
    Maps normalized content types to deserializers.

    • Writers build a new immutable snapshot under a lock and swap it in,
      readers (in-flight executions) only dereference the current snapshot.
    • The wildcard key "*" is a catch-all for unmapped or empty content types
      and is never advertised in accept_types.
    • accept_types keeps registration order; re-registering a content type
      replaces its handler without moving it.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshot = _Snapshot(handlers=MappingProxyType({}), accept_types=())

    @property
    def accept_types(self) -> tuple[str, ...]:
        return self._snapshot.accept_types

    def accept_header(self) -> str:
        return ", ".join(self._snapshot.accept_types)

    def register(self, content_type: str, deserializer: Deserializer) -> None:
        key = WILDCARD if content_type == WILDCARD else normalize_content_type(content_type)
        if not key:
            raise ValueError("content_type must be a non-empty media type or '*'")

        with self._lock:
            current = self._snapshot
            handlers = dict(current.handlers)
            handlers[key] = deserializer

            accept_types = current.accept_types
            if key != WILDCARD and key not in (normalize_content_type(t) for t in accept_types):
                accept_types = accept_types + (content_type,)

            self._snapshot = _Snapshot(MappingProxyType(handlers), accept_types)

    def unregister(self, content_type: str) -> None:
        key = WILDCARD if content_type == WILDCARD else normalize_content_type(content_type)

        with self._lock:
            current = self._snapshot
            handlers = {k: v for k, v in current.handlers.items() if k != key}
            accept_types = tuple(
                t for t in current.accept_types if normalize_content_type(t) != key
            )
            self._snapshot = _Snapshot(MappingProxyType(handlers), accept_types)

    def clear(self) -> None:
        with self._lock:
            self._snapshot = _Snapshot(handlers=MappingProxyType({}), accept_types=())

    def lookup(self, content_type: str | None) -> Deserializer | None:
        handlers = self._snapshot.handlers
        key = normalize_content_type(content_type)

        if key and key in handlers:
            return handlers[key]
        return handlers.get(WILDCARD)

    def __contains__(self, content_type: str) -> bool:
        key = WILDCARD if content_type == WILDCARD else normalize_content_type(content_type)
        return key in self._snapshot.handlers

    def __len__(self) -> int:
        return len(self._snapshot.handlers)
