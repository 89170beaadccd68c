import json
import yaml
from typing import Any, Callable
from pathlib import Path

from rest_client.config.models.client import ClientConfigModel


class ConfigLoader:
    """
    Load + validate client configs from YAML/JSON.

    - `source` may be a file path or the raw document text.
    - An optional `section` selects a nested mapping (e.g. "client") before
      validation.
    - Result is a fully validated ClientConfigModel.
    """

    def __init__(self, section: str | None = None) -> None:
        self._section = section

    def from_yaml(self, source: str | Path) -> ClientConfigModel:
        data = self._load(source, parser=yaml.safe_load)
        return self._build(data)

    def from_json(self, source: str | Path) -> ClientConfigModel:
        data = self._load(source, parser=json.loads)
        return self._build(data)

    def _load(
        self,
        source: str | Path,
        *,
        parser: Callable[[str], Any],
    ) -> Any:
        text = self._read_source(source)
        return parser(text)

    def _read_source(self, source: str | Path) -> str:
        """
        Read source as text.
        If `source` is a file path, read it.
        Otherwise treat it as raw content.
        """
        if isinstance(source, Path):
            return source.read_text()

        # string: path or raw content?
        if "\n" not in source:
            p = Path(source)
            if p.is_file():
                return p.read_text()

        return source

    def _build(self, data: Any) -> ClientConfigModel:
        if self._section is not None:
            if not isinstance(data, dict) or self._section not in data:
                raise ValueError(f"Config section '{self._section}' not found")
            data = data[self._section]

        return ClientConfigModel.model_validate(data)
