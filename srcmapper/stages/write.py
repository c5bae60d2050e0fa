from pathlib import Path

from srcmapper.config import WriteOptions, resolve_value
from srcmapper.diagnostics import Diagnostics
from srcmapper.errors import StreamUnsupported
from srcmapper.file import File
from srcmapper.processor.backfill import MissingContentPolicy, backfill
from srcmapper.processor.comments import comment_for, encode_inline
from srcmapper.processor.syntax import comment_syntax
from srcmapper.sourcemap import SourceMap, dumps
from srcmapper.utils.paths import is_url, relative_to, resolve, rooted


class WriteStage:
    """Serializes attached maps inline or into sibling ``.map`` files."""

    name = "write"

    def __init__(self, options: WriteOptions | None = None) -> None:
        self._options = options or WriteOptions()
        self._diagnostics = Diagnostics(self.name, self._options.debug)

    @property
    def options(self) -> WriteOptions:
        return self._options

    def __call__(self, file: File) -> list[File]:
        if file.is_stream():
            raise StreamUnsupported(self._diagnostics.label, file.path)
        if file.is_null() or file.source_map is None:
            return [file]

        source_map = file.source_map
        source_map["file"] = file.unix_relative
        if self._options.map_sources is not None:
            source_map["sources"] = [self._options.map_sources(s, file) for s in source_map["sources"]]
        self._prepare_content(file, source_map)

        source_root = resolve_value(self._options.source_root, file)
        if source_root is not None:
            source_map["sourceRoot"] = source_root

        if self._options.dest_path is None:
            return self._write_inline(file, source_map)
        return self._write_external(file, source_map, self._options.dest_path)

    def _prepare_content(self, file: File, source_map: SourceMap) -> None:
        if not self._options.include_content:
            source_map.pop("sourcesContent", None)
            return
        source_map["sourcesContent"] = backfill(
            source_map["sources"],
            source_map.get("sourcesContent"),
            lambda _i, source: None if is_url(source) else resolve(file.base or file.cwd, source),
            self._diagnostics,
            MissingContentPolicy.DROP,
        )

    def _append_comment(self, file: File, url: str) -> None:
        comment = comment_for(url, comment_syntax(file.extname))
        if comment is None or not self._options.add_comment or not isinstance(file.contents, bytes):
            return
        file.contents = file.contents + f"\n{comment}".encode("utf-8")

    def _write_inline(self, file: File, source_map: SourceMap) -> list[File]:
        self._append_comment(file, encode_inline(dumps(source_map), self._options.charset))
        return [file]

    def _write_external(self, file: File, source_map: SourceMap, dest_path: str | Path) -> list[File]:
        if file.path is None:
            raise ValueError("file has no path")
        map_path = resolve(file.dirname, dest_path, f"{file.basename}.map")
        if self._options.map_file is not None:
            map_path = Path(self._options.map_file(map_path))

        source_map["file"] = relative_to(map_path.parent, file.path)
        map_file = File(
            path=map_path,
            base=file.base,
            cwd=file.cwd,
            contents=dumps(source_map).encode("utf-8"),
        )

        url = relative_to(file.dirname, map_path)
        prefix = resolve_value(self._options.source_mapping_url_prefix, file)
        if prefix:
            url = prefix + rooted(url)
        self._append_comment(file, url)
        return [file, map_file]
