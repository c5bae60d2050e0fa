import os
import re
from pathlib import Path, PurePath

URL_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*://")


def is_url(value: str | None) -> bool:
    return bool(value) and URL_PATTERN.match(value) is not None


def unix_style_path(path: str | PurePath) -> str:
    return str(path).replace(os.sep, "/")


def resolve(base: str | PurePath, *parts: str | PurePath) -> Path:
    """Join ``parts`` onto ``base`` the way a shell ``cd`` would, then normalize.

    An absolute part discards everything before it. ``..`` segments are
    collapsed lexically; the filesystem is never consulted.
    """
    return Path(os.path.normpath(os.path.join(base, *parts)))


def relative_to(start: str | PurePath, target: str | PurePath) -> str:
    """Forward-slash path of ``target`` as seen from the directory ``start``."""
    return unix_style_path(os.path.relpath(target, start))


def rooted(path: str) -> str:
    # "../maps/a.js.map" -> "/maps/a.js.map"
    return unix_style_path(os.path.normpath(os.path.join(os.sep, path)))
