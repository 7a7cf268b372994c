"""Diff-related data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class DiffKind(str, Enum):
    """Kind of a diff operation or row side"""

    EQUAL = "equal"
    INSERT = "insert"
    DELETE = "delete"
    EMPTY = "empty"  # blank side of an unpaired row


class DiffOp(BaseModel):
    """A single step of a line-level edit script"""

    model_config = ConfigDict(frozen=True)

    kind: DiffKind
    content: str
    left_line: int | None = None  # 1-indexed, equal/delete only
    right_line: int | None = None  # 1-indexed, equal/insert only


class DiffChar(BaseModel):
    """A single step of a character-level edit script"""

    model_config = ConfigDict(frozen=True)

    kind: DiffKind
    value: str


class DiffSide(BaseModel):
    """One half of a side-by-side row"""

    model_config = ConfigDict(frozen=True)

    line: int  # -1 when blank
    content: str
    kind: DiffKind

    @property
    def is_blank(self) -> bool:
        return self.kind == DiffKind.EMPTY


class DiffRow(BaseModel):
    """A side-by-side display row"""

    model_config = ConfigDict(frozen=True)

    left: DiffSide
    right: DiffSide
    is_change_block: bool = False

    @model_validator(mode="after")
    def _check_not_blank(self) -> "DiffRow":
        if self.left.is_blank and self.right.is_blank:
            raise ValueError("A diff row needs at least one non-blank side")
        return self


class HighlightSpan(BaseModel):
    """Run of characters sharing the same highlight state"""

    model_config = ConfigDict(frozen=True)

    text: str
    highlighted: bool = False


class RowHighlight(BaseModel):
    """Inline character highlighting for one change-block row"""

    model_config = ConfigDict(frozen=True)

    row_index: int
    left: list[HighlightSpan]
    right: list[HighlightSpan]


class DiffSummary(BaseModel):
    """Row counts for a comparison"""

    model_config = ConfigDict(frozen=True)

    added: int = 0
    removed: int = 0
    changed: int = 0
    unchanged: int = 0
    identical: bool = True


class DiffResult(BaseModel):
    """Complete comparison of two texts"""

    model_config = ConfigDict(frozen=True)

    ops: list[DiffOp]
    rows: list[DiffRow]
    highlights: list[RowHighlight] = []
    summary: DiffSummary


# ========== Request / Response models ==========


class TextPairRequest(BaseModel):
    """Two texts to compare"""

    left: str = ""
    right: str = ""


class DiffRequest(TextPairRequest):
    """Request for a full side-by-side comparison"""

    highlight: bool | None = None  # falls back to config diff.highlightChanges


class PreviewRequest(TextPairRequest):
    """Request for an inline text preview"""

    context_lines: int | None = None


class ProjectRowsRequest(BaseModel):
    """Edit script to regroup into display rows"""

    ops: list[DiffOp]


class LineDiffResponse(BaseModel):
    ops: list[DiffOp]


class CharDiffResponse(BaseModel):
    chars: list[DiffChar]


class RowsResponse(BaseModel):
    rows: list[DiffRow]


class PreviewResponse(BaseModel):
    preview: str
    summary: DiffSummary
