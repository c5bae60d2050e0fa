import json
from typing import Any, NotRequired, TypedDict

from srcmapper.errors import MalformedExternalMap


class SourceMap(TypedDict):
    version: int
    sources: list[str]
    names: list[str]
    mappings: str
    file: NotRequired[str]
    sourceRoot: NotRequired[str]
    sourcesContent: NotRequired[list[str | None]]


def skeleton(
    source: str,
    content: str | None,
    mappings: str = "",
    names: list[str] | None = None,
) -> SourceMap:
    return {
        "version": 3,
        "names": names or [],
        "mappings": mappings,
        "sources": [source],
        "sourcesContent": [content],
    }


def parse(text: str, origin: str) -> SourceMap:
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedExternalMap(origin, str(e)) from e
    if not isinstance(data, dict):
        raise MalformedExternalMap(origin, "not a JSON object")
    if str(data.get("version")) != "3":
        raise MalformedExternalMap(origin, f"unsupported version {data.get('version')!r}")
    sources = data.get("sources")
    if not isinstance(sources, list) or not all(isinstance(s, str) for s in sources):
        raise MalformedExternalMap(origin, "sources must be a list of strings")
    contents = data.get("sourcesContent")
    if contents is not None and not (
        isinstance(contents, list) and all(c is None or isinstance(c, str) for c in contents)
    ):
        raise MalformedExternalMap(origin, "sourcesContent must be a list of strings or nulls")
    data.setdefault("names", [])
    data.setdefault("mappings", "")
    return data


def dumps(source_map: SourceMap) -> str:
    return json.dumps(source_map, separators=(",", ":"), ensure_ascii=False)
