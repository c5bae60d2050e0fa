from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Self

from srcmapper.file import File

ValueSource = str | Callable[[File], str]


def resolve_value(value: ValueSource | None, file: File) -> str | None:
    if value is None:
        return None
    if callable(value):
        return value(file)
    return value


_CAMEL_ALIASES = {
    "loadMaps": "load_maps",
    "identityMap": "identity_map",
    "addComment": "add_comment",
    "includeContent": "include_content",
    "sourceRoot": "source_root",
    "sourceMappingURLPrefix": "source_mapping_url_prefix",
    "destPath": "dest_path",
    "mapSources": "map_sources",
    "mapFile": "map_file",
}


def _normalize(options: Mapping[str, Any], cls: type) -> dict[str, Any]:
    known = {f.name for f in fields(cls)}
    normalized: dict[str, Any] = {}
    for key, value in options.items():
        name = _CAMEL_ALIASES.get(key, key)
        if name not in known:
            raise ValueError(f"Unknown option for {cls.__name__}: {key}")
        normalized[name] = value
    return normalized


@dataclass(frozen=True)
class InitOptions:
    load_maps: bool = False
    identity_map: bool = False
    # Accepted for symmetry with WriteOptions; the loader never adds comments.
    add_comment: bool = False
    debug: bool = False

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> Self:
        return cls(**_normalize(options, cls))


@dataclass(frozen=True)
class WriteOptions:
    dest_path: str | Path | None = None
    add_comment: bool = True
    include_content: bool = True
    source_root: ValueSource | None = None
    source_mapping_url_prefix: ValueSource | None = None
    charset: str | None = None
    map_sources: Callable[[str, File], str] | None = None
    map_file: Callable[[Path], Path | str] | None = None
    debug: bool = False

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> Self:
        return cls(**_normalize(options, cls))

    @property
    def inline(self) -> bool:
        return self.dest_path is None
