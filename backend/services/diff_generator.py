"""
Diff Generator Service - Side-by-side line diffs with inline character highlighting
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

from models.diff import (
    DiffChar,
    DiffKind,
    DiffOp,
    DiffResult,
    DiffRow,
    DiffSide,
    DiffSummary,
    HighlightSpan,
    RowHighlight,
)

from .lcs import diff_sequences

logger = logging.getLogger(__name__)

DEFAULT_MAX_CELLS = 4_000_000
DEFAULT_CONTEXT_LINES = 3


def split_lines(text: str) -> list[str]:
    """Split text on "\\n" only. Empty text has no lines; "\\r" stays in the content."""
    if not text:
        return []
    return text.split("\n")


def _blank_side() -> DiffSide:
    return DiffSide(line=-1, content="", kind=DiffKind.EMPTY)


def _coalesce(chars: Iterable[DiffChar], changed: DiffKind) -> list[HighlightSpan]:
    """Merge characters into spans, highlighting those of kind ``changed``"""
    spans: list[HighlightSpan] = []
    text = ""
    highlighted = False

    for char in chars:
        if char.kind not in (DiffKind.EQUAL, changed):
            continue
        is_changed = char.kind == changed
        if text and is_changed != highlighted:
            spans.append(HighlightSpan(text=text, highlighted=highlighted))
            text = ""
        text += char.value
        highlighted = is_changed

    if text:
        spans.append(HighlightSpan(text=text, highlighted=highlighted))
    return spans


class DiffGenerator:
    """Generate side-by-side diffs for the text comparison tool"""

    def __init__(self, config: dict[str, Any] | None = None):
        cfg = (config or {}).get("diff", {})
        # 0 disables the size cap
        self.max_cells = cfg.get("maxCells", DEFAULT_MAX_CELLS) or None
        self.context_lines = cfg.get("contextLines", DEFAULT_CONTEXT_LINES)
        self.highlight_changes = cfg.get("highlightChanges", True)

    # ========== Edit scripts ==========

    def diff_lines(self, left: str, right: str) -> list[DiffOp]:
        """Line-level edit script with 1-indexed line numbers"""
        left_lines = split_lines(left)
        right_lines = split_lines(right)

        ops = []
        for kind, i, j in diff_sequences(left_lines, right_lines, max_cells=self.max_cells):
            if kind == DiffKind.EQUAL:
                ops.append(DiffOp(kind=kind, content=left_lines[i], left_line=i + 1, right_line=j + 1))
            elif kind == DiffKind.INSERT:
                ops.append(DiffOp(kind=kind, content=right_lines[j], right_line=j + 1))
            else:
                ops.append(DiffOp(kind=kind, content=left_lines[i], left_line=i + 1))
        return ops

    def diff_chars(self, left: str, right: str) -> list[DiffChar]:
        """Character-level edit script"""
        chars = []
        for kind, i, j in diff_sequences(left, right, max_cells=self.max_cells):
            value = right[j] if kind == DiffKind.INSERT else left[i]
            chars.append(DiffChar(kind=kind, value=value))
        return chars

    # ========== Display rows ==========

    def project_rows(self, ops: Sequence[DiffOp]) -> list[DiffRow]:
        """
        Regroup an edit script into side-by-side rows.

        A delete immediately followed by an insert becomes one change-block
        row. Pairing is purely positional: nothing is matched by content
        similarity, and a delete followed by another delete stays unpaired.
        """
        rows = []
        i = 0
        while i < len(ops):
            current = ops[i]
            following = ops[i + 1] if i + 1 < len(ops) else None

            if current.kind == DiffKind.DELETE and following is not None and following.kind == DiffKind.INSERT:
                rows.append(
                    DiffRow(
                        left=DiffSide(line=current.left_line, content=current.content, kind=DiffKind.DELETE),
                        right=DiffSide(line=following.right_line, content=following.content, kind=DiffKind.INSERT),
                        is_change_block=True,
                    )
                )
                i += 2
                continue

            if current.kind == DiffKind.EQUAL:
                rows.append(
                    DiffRow(
                        left=DiffSide(line=current.left_line, content=current.content, kind=DiffKind.EQUAL),
                        right=DiffSide(line=current.right_line, content=current.content, kind=DiffKind.EQUAL),
                    )
                )
            elif current.kind == DiffKind.INSERT:
                rows.append(
                    DiffRow(
                        left=_blank_side(),
                        right=DiffSide(line=current.right_line, content=current.content, kind=DiffKind.INSERT),
                    )
                )
            elif current.kind == DiffKind.DELETE:
                rows.append(
                    DiffRow(
                        left=DiffSide(line=current.left_line, content=current.content, kind=DiffKind.DELETE),
                        right=_blank_side(),
                    )
                )
            else:
                raise ValueError(f"Unexpected op kind in edit script: {current.kind}")
            i += 1

        return rows

    def highlight_row(self, row: DiffRow) -> tuple[list[HighlightSpan], list[HighlightSpan]]:
        """Inline spans for both sides of a change-block row"""
        if not row.is_change_block:
            return (
                [HighlightSpan(text=row.left.content)] if row.left.content else [],
                [HighlightSpan(text=row.right.content)] if row.right.content else [],
            )

        chars = self.diff_chars(row.left.content, row.right.content)
        return _coalesce(chars, DiffKind.DELETE), _coalesce(chars, DiffKind.INSERT)

    def summarize(self, rows: Sequence[DiffRow]) -> DiffSummary:
        """Count rows by kind"""
        added = removed = changed = unchanged = 0
        for row in rows:
            if row.is_change_block:
                changed += 1
            elif row.left.kind == DiffKind.EQUAL:
                unchanged += 1
            elif row.left.is_blank:
                added += 1
            else:
                removed += 1

        return DiffSummary(
            added=added,
            removed=removed,
            changed=changed,
            unchanged=unchanged,
            identical=not (added or removed or changed),
        )

    # ========== Full comparisons ==========

    def generate_diff(self, left: str, right: str, highlight: bool | None = None) -> DiffResult:
        """Compare two texts: edit script, rows, change highlights and summary"""
        if highlight is None:
            highlight = self.highlight_changes

        ops = self.diff_lines(left, right)
        rows = self.project_rows(ops)

        highlights = []
        if highlight:
            for index, row in enumerate(rows):
                if row.is_change_block:
                    left_spans, right_spans = self.highlight_row(row)
                    highlights.append(RowHighlight(row_index=index, left=left_spans, right=right_spans))

        summary = self.summarize(rows)
        logger.debug(
            "Compared %d ops into %d rows (%d changed, %d added, %d removed)",
            len(ops),
            len(rows),
            summary.changed,
            summary.added,
            summary.removed,
        )

        return DiffResult(ops=ops, rows=rows, highlights=highlights, summary=summary)

    def generate_inline_preview(
        self,
        left: str,
        right: str,
        context_lines: int | None = None,
    ) -> str:
        """Generate inline preview with context lines around changes"""
        rows = self.project_rows(self.diff_lines(left, right))
        return self.render_preview(rows, context_lines)

    def render_preview(self, rows: Sequence[DiffRow], context_lines: int | None = None) -> str:
        """Render rows as "  ", "- " and "+ " lines, collapsing distant context to "..."."""
        if context_lines is None:
            context_lines = self.context_lines

        changed = [index for index, row in enumerate(rows) if row.left.kind != DiffKind.EQUAL]
        if not changed:
            return ""

        visible = set()
        for index in changed:
            visible.update(range(index - context_lines, index + context_lines + 1))

        result_lines = []
        for index, row in enumerate(rows):
            if row.left.kind == DiffKind.EQUAL:
                if index in visible:
                    result_lines.append(f"  {row.left.content}")
                elif not result_lines or result_lines[-1] != "...":
                    result_lines.append("...")
                continue

            if not row.left.is_blank:
                result_lines.append(f"- {row.left.content}")
            if not row.right.is_blank:
                result_lines.append(f"+ {row.right.content}")

        return "\n".join(result_lines)


# ═══════════════════════════════════════════════════════════════════════════
# Module-level helper functions
# ═══════════════════════════════════════════════════════════════════════════


def diff_lines(left: str, right: str, max_cells: int | None = None) -> list[DiffOp]:
    """Convenience function for a line-level edit script."""
    return DiffGenerator({"diff": {"maxCells": max_cells}}).diff_lines(left, right)


def diff_chars(left: str, right: str, max_cells: int | None = None) -> list[DiffChar]:
    """Convenience function for a character-level edit script."""
    return DiffGenerator({"diff": {"maxCells": max_cells}}).diff_chars(left, right)


def project_rows(ops: Sequence[DiffOp]) -> list[DiffRow]:
    """Convenience function to regroup an edit script into display rows."""
    return DiffGenerator().project_rows(ops)
