import os
from pathlib import Path

from srcmapper.errors import SourceNotFound, SourceUnreadable
from srcmapper.file import File
from srcmapper.utils.paths import resolve

BOM = "\ufeff"


def strip_bom(text: str) -> str:
    return text[1:] if text.startswith(BOM) else text


def read_text(path: Path) -> str:
    try:
        return strip_bom(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, NotADirectoryError, IsADirectoryError) as e:
        raise SourceNotFound(path) from e
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnreadable(path, str(e)) from e


class OutputFS:
    """Mirrors pipeline output into ``out_dir`` by each file's path relative to ``root``."""

    def __init__(self, root: Path, out_dir: Path) -> None:
        self._root = root
        self._out_dir = out_dir

    def target_path(self, file: File) -> Path:
        if file.path is None:
            raise ValueError("file has no path")
        return resolve(self._out_dir, os.path.relpath(file.path, self._root))

    def write(self, file: File) -> Path | None:
        if not isinstance(file.contents, bytes):
            return None
        target = self.target_path(file)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(file.contents)
        return target
