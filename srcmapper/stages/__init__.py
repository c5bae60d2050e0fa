from pathlib import Path
from typing import Any

from srcmapper.config import InitOptions, WriteOptions
from srcmapper.stages.init import InitStage
from srcmapper.stages.write import WriteStage


def init(**options: Any) -> InitStage:
    return InitStage(InitOptions.from_mapping(options))


def write(dest_path: str | Path | None = None, **options: Any) -> WriteStage:
    return WriteStage(WriteOptions.from_mapping({"dest_path": dest_path, **options}))


__all__ = ["InitStage", "WriteStage", "init", "write"]
