from srcmapper.processor.backfill import MissingContentPolicy, backfill
from srcmapper.processor.comments import CommentKind, ScanResult, comment_for, decode_inline, encode_inline, scan
from srcmapper.processor.identity import IdentityMap, IdentityMapGenerator
from srcmapper.processor.queue_manager import WorkQueue
from srcmapper.processor.syntax import SyntaxKind, comment_syntax, detect_syntax

__all__ = [
    "MissingContentPolicy", "backfill",
    "CommentKind", "ScanResult", "comment_for", "decode_inline", "encode_inline", "scan",
    "IdentityMap", "IdentityMapGenerator", "WorkQueue",
    "SyntaxKind", "comment_syntax", "detect_syntax",
]
