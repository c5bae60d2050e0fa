from enum import StrEnum


class SyntaxKind(StrEnum):
    JS = "js"
    CSS = "css"
    UNKNOWN = "unknown"


_EXT_MAP: dict[str, SyntaxKind] = {
    ".js": SyntaxKind.JS,
    ".mjs": SyntaxKind.JS,
    ".cjs": SyntaxKind.JS,
    ".jsx": SyntaxKind.JS,
    ".css": SyntaxKind.CSS,
}


def detect_syntax(extname: str) -> SyntaxKind:
    return _EXT_MAP.get(extname.lower(), SyntaxKind.UNKNOWN)


def comment_syntax(extname: str) -> SyntaxKind:
    # Files without an extension are written with script comments.
    if not extname:
        return SyntaxKind.JS
    return detect_syntax(extname)
