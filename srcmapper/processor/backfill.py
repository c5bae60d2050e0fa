from collections.abc import Callable, Mapping, Sequence
from enum import StrEnum
from pathlib import Path

from srcmapper.diagnostics import Diagnostics
from srcmapper.errors import SourceNotFound, SourceUnreadable
from srcmapper.utils.file_ops import read_text

# Maps (index, source) to the file to read, or None when the source must not be read.
SourceResolver = Callable[[int, str], Path | None]


class MissingContentPolicy(StrEnum):
    KEEP_NULL = "keep_null"  # unresolved entries become None
    DROP = "drop"  # unresolved entries are left out


def _place(contents: list[str | None], index: int, value: str | None) -> None:
    if index >= len(contents):
        contents.extend([None] * (index + 1 - len(contents)))
    contents[index] = value


def backfill(
    sources: Sequence[str],
    contents: Sequence[str | None] | None,
    resolve: SourceResolver,
    diagnostics: Diagnostics,
    policy: MissingContentPolicy = MissingContentPolicy.KEEP_NULL,
    known: Mapping[Path, str] | None = None,
) -> list[str | None]:
    """Return ``contents`` with missing entries read from disk.

    Entries that already hold text are left alone. ``known`` supplies text
    for paths that must not be re-read, such as the file being processed.
    """
    filled: list[str | None] = list(contents or [])
    for i, source in enumerate(sources):
        if i < len(filled) and filled[i] is not None:
            continue
        path = resolve(i, source)
        if path is None:
            if policy == MissingContentPolicy.KEEP_NULL:
                _place(filled, i, None)
            continue
        if known and path in known:
            _place(filled, i, known[path])
            continue
        diagnostics.loading_source(source)
        try:
            _place(filled, i, read_text(path))
        except (SourceNotFound, SourceUnreadable):
            diagnostics.source_not_found(path)
            if policy == MissingContentPolicy.KEEP_NULL:
                _place(filled, i, None)

    if policy == MissingContentPolicy.KEEP_NULL and len(filled) < len(sources):
        filled.extend([None] * (len(sources) - len(filled)))
    return filled
