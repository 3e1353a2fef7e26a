"""Row/document text model with grapheme-aware cursor stops."""

from .document import Document
from .errors import DocumentIOError, OutOfRangeError, RowEncodingError
from .highlight import FileType, HighlightKind, HighlightSpan, detect_file_type
from .position import Position, SearchDirection
from .row import Row
from .storage import FileLineStore, LineStore, join_lines, split_lines
from .widths import clip_to_width, cluster_width, segment, text_width

__all__ = [
    "Document",
    "Row",
    "Position",
    "SearchDirection",
    "LineStore",
    "FileLineStore",
    "split_lines",
    "join_lines",
    "FileType",
    "HighlightKind",
    "HighlightSpan",
    "detect_file_type",
    "DocumentIOError",
    "OutOfRangeError",
    "RowEncodingError",
    "cluster_width",
    "segment",
    "text_width",
    "clip_to_width",
]
