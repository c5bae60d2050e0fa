"""Runs files one at a time through a chain of stages.

A stage is any callable taking a :class:`File` and returning the files it
emits (zero, one or several). A stage signals a fatal problem with that file
by raising; the pipeline records the error as that file's outcome and moves
on to the next input.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Protocol

from srcmapper.file import File

logger = logging.getLogger(__name__)


class Stage(Protocol):
    def __call__(self, file: File) -> Iterable[File]: ...


@dataclass(frozen=True, slots=True)
class Outcome:
    file: File
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Pipeline:
    def __init__(self, *stages: Stage) -> None:
        self._stages = stages

    def process(self, file: File) -> list[File]:
        current = [file]
        for stage in self._stages:
            emitted: list[File] = []
            for item in current:
                emitted.extend(stage(item))
            current = emitted
        return current

    def run(self, files: Iterable[File]) -> Iterator[Outcome]:
        for file in files:
            try:
                emitted = self.process(file)
            except Exception as e:
                logger.debug("Pipeline failed for %s: %s", file.path, e)
                yield Outcome(file=file, error=e)
                continue
            for item in emitted:
                yield Outcome(file=item)

    def files(self, files: Iterable[File]) -> Iterator[File]:
        for outcome in self.run(files):
            if outcome.error is not None:
                raise outcome.error
            yield outcome.file
