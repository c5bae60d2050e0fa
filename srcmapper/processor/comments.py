import base64
import binascii
import re
from dataclasses import dataclass
from enum import StrEnum

from srcmapper.errors import MalformedExternalMap
from srcmapper.processor.syntax import SyntaxKind
from srcmapper.sourcemap import SourceMap, parse

_LINE = r"//[@#][ \t]+sourceMappingURL=(?P<line>[^\s'\"]+?)[ \t]*$"
_BLOCK = r"/\*[@#][ \t]+sourceMappingURL=(?P<block>[^*]+?)[ \t]*\*/[ \t]*$"
COMMENT_PATTERN = re.compile(rf"(?:{_LINE})|(?:{_BLOCK})", re.MULTILINE)

DATA_URI_PATTERN = re.compile(
    r"^data:(?:application|text)/json;(?:charset[:=][^;]+;)?base64,(?P<payload>.*)$",
    re.DOTALL,
)


class CommentKind(StrEnum):
    INLINE = "inline"
    EXTERNAL = "external"


@dataclass(frozen=True, slots=True)
class ScanResult:
    content: str
    value: str | None = None
    kind: CommentKind | None = None

    @property
    def found(self) -> bool:
        return self.value is not None


def scan(content: str) -> ScanResult:
    match = None
    for match in COMMENT_PATTERN.finditer(content):
        pass
    if match is None:
        return ScanResult(content=content)

    value = (match.group("line") or match.group("block")).strip()
    head = content[: match.start()]
    if head.endswith("\r\n"):
        head = head[:-2]
    elif head.endswith("\n"):
        head = head[:-1]
    kind = CommentKind.INLINE if DATA_URI_PATTERN.match(value) else CommentKind.EXTERNAL
    return ScanResult(content=head + content[match.end():], value=value, kind=kind)


def decode_inline(value: str) -> SourceMap:
    match = DATA_URI_PATTERN.match(value)
    if not match:
        raise MalformedExternalMap("<inline>", "not a base64 JSON data URI")
    try:
        raw = base64.b64decode(match.group("payload"))
        return parse(raw.decode("utf-8"), "<inline>")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise MalformedExternalMap("<inline>", str(e)) from e


def encode_inline(serialized: str, charset: str | None = None) -> str:
    payload = base64.b64encode(serialized.encode("utf-8")).decode("ascii")
    charset_part = f"charset={charset};" if charset else ""
    return f"data:application/json;{charset_part}base64,{payload}"


def comment_for(value: str, syntax: SyntaxKind) -> str | None:
    if syntax == SyntaxKind.CSS:
        return f"/*# sourceMappingURL={value} */"
    if syntax == SyntaxKind.JS:
        return f"//# sourceMappingURL={value}"
    return None
