import logging
from pathlib import Path

from srcmapper.config import InitOptions
from srcmapper.diagnostics import Diagnostics
from srcmapper.errors import MalformedExternalMap, SourceNotFound, SourceUnreadable, StreamUnsupported
from srcmapper.file import File
from srcmapper.processor import identity
from srcmapper.processor.backfill import MissingContentPolicy, backfill
from srcmapper.processor.comments import CommentKind, decode_inline, scan
from srcmapper.processor.syntax import detect_syntax
from srcmapper.sourcemap import SourceMap, parse, skeleton
from srcmapper.utils.file_ops import read_text
from srcmapper.utils.paths import is_url, relative_to, resolve

logger = logging.getLogger(__name__)


class InitStage:
    """Attaches a source map to every buffered file that does not carry one yet."""

    name = "init"

    def __init__(self, options: InitOptions | None = None) -> None:
        self._options = options or InitOptions()
        self._diagnostics = Diagnostics(self.name, self._options.debug)

    @property
    def options(self) -> InitOptions:
        return self._options

    def __call__(self, file: File) -> list[File]:
        if file.is_stream():
            raise StreamUnsupported(self._diagnostics.label, file.path)
        if file.is_null() or file.source_map is not None:
            return [file]

        text = file.text()
        content = text if text is not None else ""
        source_map: SourceMap | None = None
        if self._options.load_maps:
            source_map, content = self._load(file, content)

        if source_map is None:
            source_map = self._synthesize(file, content, text)
        elif text is not None:
            file.set_text(content)

        source_map["file"] = file.unix_relative
        file.source_map = source_map
        return [file]

    def _load(self, file: File, content: str) -> tuple[SourceMap | None, str]:
        scanned = scan(content)
        if scanned.kind == CommentKind.INLINE and scanned.value is not None:
            try:
                source_map = decode_inline(scanned.value)
            except MalformedExternalMap as e:
                logger.debug("Ignoring inline map in %s: %s", file.path, e)
                return None, content
            map_dir = file.dirname
        else:
            if scanned.value is not None and is_url(scanned.value):
                logger.debug("Not fetching remote map %s for %s", scanned.value, file.path)
                return None, content
            if scanned.value is not None:
                map_path = resolve(file.dirname, scanned.value)
            else:
                map_path = Path(f"{file.path}.map")
            try:
                source_map = parse(read_text(map_path), str(map_path))
            except (SourceNotFound, SourceUnreadable, MalformedExternalMap) as e:
                logger.debug("No usable map for %s: %s", file.path, e)
                return None, content
            map_dir = map_path.parent

        self._fix_sources(file, source_map, map_dir, scanned.content)
        return source_map, scanned.content

    def _fix_sources(self, file: File, source_map: SourceMap, map_dir: Path, content: str) -> None:
        # Sources in a loaded map are relative to the map; make them relative to the file's base.
        if file.path is None or file.base is None:
            raise ValueError("file has no path")
        original = list(source_map["sources"])
        source_root = source_map.get("sourceRoot")
        targets: list[Path | None] = []
        rewritten: list[str] = []
        for source in original:
            if is_url(source):
                targets.append(None)
                rewritten.append(source)
                continue
            absolute = resolve(map_dir, source)
            rewritten.append(relative_to(file.base, absolute))
            if not source_root:
                targets.append(absolute)
            elif is_url(source_root):
                targets.append(None)
            else:
                targets.append(resolve(map_dir, source_root, source))

        source_map["sources"] = rewritten
        source_map["sourcesContent"] = backfill(
            original,
            source_map.get("sourcesContent"),
            lambda i, _source: targets[i],
            self._diagnostics,
            MissingContentPolicy.KEEP_NULL,
            known={resolve(file.path): content},
        )

    def _synthesize(self, file: File, content: str, text: str | None) -> SourceMap:
        mappings, names = "", []
        if self._options.identity_map:
            generated = identity.generate(content, detect_syntax(file.extname))
            mappings, names = generated.mappings, generated.names
        return skeleton(file.unix_relative, text, mappings, names)
