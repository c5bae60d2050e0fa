from pathlib import Path


class SourceMapError(Exception):
    pass


class StreamUnsupported(SourceMapError):
    def __init__(self, label: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(f"{label}: Streaming not supported")


class SourceNotFound(SourceMapError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"source file not found: {path}")


class SourceUnreadable(SourceMapError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"source file unreadable: {path} ({reason})")


class MalformedExternalMap(SourceMapError):
    def __init__(self, origin: str, reason: str) -> None:
        self.origin = origin
        super().__init__(f"malformed source map {origin}: {reason}")
