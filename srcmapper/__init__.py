from srcmapper.config import InitOptions, WriteOptions
from srcmapper.errors import (
    MalformedExternalMap,
    SourceMapError,
    SourceNotFound,
    SourceUnreadable,
    StreamUnsupported,
)
from srcmapper.file import File, Streamed
from srcmapper.pipeline import Outcome, Pipeline
from srcmapper.sourcemap import SourceMap
from srcmapper.stages import InitStage, WriteStage, init, write

__all__ = [
    "InitOptions",
    "WriteOptions",
    "MalformedExternalMap",
    "SourceMapError",
    "SourceNotFound",
    "SourceUnreadable",
    "StreamUnsupported",
    "File",
    "Streamed",
    "Outcome",
    "Pipeline",
    "SourceMap",
    "InitStage",
    "WriteStage",
    "init",
    "write",
]
