from collections.abc import Iterable, Iterator
from pathlib import Path

import pathspec

DEFAULT_IGNORES = (".git/", "node_modules/", "__pycache__/", ".venv/")


class GitignoreSpec:
    def __init__(self, root: Path, extra: Iterable[str] = ()) -> None:
        self._root = root
        self._spec = self._load_gitignore(extra)

    def _load_gitignore(self, extra: Iterable[str]) -> pathspec.PathSpec:
        gitignore_path = self._root / ".gitignore"
        patterns: list[str] = []
        if gitignore_path.exists():
            patterns = gitignore_path.read_text().splitlines()
        patterns.extend(DEFAULT_IGNORES)
        patterns.extend(extra)
        return pathspec.PathSpec.from_lines("gitwildmatch", patterns)

    def matches(self, path: Path) -> bool:
        try:
            relative = path.relative_to(self._root)
        except ValueError:
            return False
        return self._spec.match_file(relative.as_posix())

    def walk(self, extensions: set[str]) -> Iterator[Path]:
        for path in sorted(self._root.rglob("*")):
            if path.is_dir() or path.suffix not in extensions:
                continue
            if self.matches(path):
                continue
            yield path
