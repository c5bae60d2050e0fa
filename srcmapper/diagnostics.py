"""Per-stage diagnostic output.

Each stage owns a logger (``srcmapper.init``, ``srcmapper.write``) and tags
every line with its label, e.g. ``srcmapper-write: source file not found: ...``.
Output is produced when the stage was created with ``debug=True`` or when
the stage's namespace (``srcmapper:init``) matches a pattern enabled
process-wide, either through :func:`enable` or the ``SRCMAPPER_DEBUG``
environment variable (comma separated, ``*`` wildcards allowed).
"""

import fnmatch
import logging
import os
from pathlib import Path

ENV_VAR = "SRCMAPPER_DEBUG"

_patterns: set[str] = {p.strip() for p in os.environ.get(ENV_VAR, "").split(",") if p.strip()}


def enable(*patterns: str) -> None:
    _patterns.update(patterns)


def disable() -> None:
    _patterns.clear()


def is_enabled(namespace: str) -> bool:
    return any(fnmatch.fnmatchcase(namespace, p) for p in _patterns)


class Diagnostics:
    def __init__(self, stage: str, debug: bool = False) -> None:
        self.stage = stage
        self.label = f"srcmapper-{stage}"
        self.namespace = f"srcmapper:{stage}"
        self._logger = logging.getLogger(f"srcmapper.{stage}")
        self._debug = debug

    @property
    def enabled(self) -> bool:
        return self._debug or is_enabled(self.namespace)

    def info(self, message: str) -> None:
        if self.enabled:
            self._logger.info("%s: %s", self.label, message)

    def warn(self, message: str) -> None:
        if self.enabled:
            self._logger.warning("%s: %s", self.label, message)

    def loading_source(self, source: str) -> None:
        self.info(f'No source content for "{source}". Loading from file.')

    def source_not_found(self, path: Path | str) -> None:
        self.warn(f"source file not found: {path}")
