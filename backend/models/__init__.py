"""Models module - Pydantic data models"""

from .config import DiffSettings, LoggingSettings, ServerSettings
from .diff import (
    CharDiffResponse,
    DiffChar,
    DiffKind,
    DiffOp,
    DiffRequest,
    DiffResult,
    DiffRow,
    DiffSide,
    DiffSummary,
    HighlightSpan,
    LineDiffResponse,
    PreviewRequest,
    PreviewResponse,
    ProjectRowsRequest,
    RowHighlight,
    RowsResponse,
    TextPairRequest,
)

__all__ = [
    # Config models
    "DiffSettings",
    "ServerSettings",
    "LoggingSettings",
    # Engine models
    "DiffKind",
    "DiffOp",
    "DiffChar",
    "DiffSide",
    "DiffRow",
    "HighlightSpan",
    "RowHighlight",
    "DiffSummary",
    "DiffResult",
    # Request/response models
    "TextPairRequest",
    "DiffRequest",
    "PreviewRequest",
    "ProjectRowsRequest",
    "LineDiffResponse",
    "CharDiffResponse",
    "RowsResponse",
    "PreviewResponse",
]
