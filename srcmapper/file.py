import copy
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from srcmapper.sourcemap import SourceMap
from srcmapper.utils.paths import unix_style_path


@dataclass(frozen=True, slots=True)
class Streamed:
    """Marks contents that arrive as an unbuffered stream."""

    body: Any = None


Contents = bytes | Streamed | None


@dataclass
class File:
    path: Path | None = None
    base: Path | None = None
    cwd: Path = field(default_factory=Path.cwd)
    contents: Contents = None
    source_map: SourceMap | None = None

    def __post_init__(self) -> None:
        self.cwd = Path(self.cwd)
        if self.path is not None:
            self.path = Path(self.path)
        self.base = Path(self.base) if self.base is not None else self.cwd

    def is_null(self) -> bool:
        return self.contents is None

    def is_stream(self) -> bool:
        return isinstance(self.contents, Streamed)

    def is_buffer(self) -> bool:
        return isinstance(self.contents, bytes)

    @property
    def relative(self) -> str:
        if self.path is None or self.base is None:
            raise ValueError("file has no path")
        return os.path.relpath(self.path, self.base)

    @property
    def unix_relative(self) -> str:
        return unix_style_path(self.relative)

    @property
    def dirname(self) -> Path:
        if self.path is None:
            raise ValueError("file has no path")
        return self.path.parent

    @property
    def basename(self) -> str:
        return self.path.name if self.path else ""

    @property
    def extname(self) -> str:
        return self.path.suffix if self.path else ""

    def text(self) -> str | None:
        if not isinstance(self.contents, bytes):
            return None
        try:
            return self.contents.decode("utf-8")
        except UnicodeDecodeError:
            return None

    def set_text(self, text: str) -> None:
        self.contents = text.encode("utf-8")

    def clone(self) -> "File":
        return replace(self, source_map=copy.deepcopy(self.source_map))
