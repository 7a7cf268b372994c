"""Text comparison API endpoints"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from models.diff import (
    CharDiffResponse,
    DiffRequest,
    DiffResult,
    LineDiffResponse,
    PreviewRequest,
    PreviewResponse,
    ProjectRowsRequest,
    RowsResponse,
    TextPairRequest,
)
from services.config_manager import ConfigManager
from services.diff_generator import DiffGenerator

router = APIRouter()

# Handlers are plain functions so FastAPI runs the O(n*m) work in its
# threadpool instead of on the event loop. DiffTooLargeError is turned into
# a 413 by the app-level handler in main.py.


def get_diff_generator() -> DiffGenerator:
    """Build a generator from the current configuration"""
    config = ConfigManager.get_instance().get_config()
    return DiffGenerator(config)


@router.post("", response_model=DiffResult)
def compare_texts(request: DiffRequest) -> DiffResult:
    """Full side-by-side comparison of two texts"""
    return get_diff_generator().generate_diff(request.left, request.right, highlight=request.highlight)


@router.post("/lines", response_model=LineDiffResponse)
def compare_lines(request: TextPairRequest) -> LineDiffResponse:
    """Line-level edit script"""
    return LineDiffResponse(ops=get_diff_generator().diff_lines(request.left, request.right))


@router.post("/chars", response_model=CharDiffResponse)
def compare_chars(request: TextPairRequest) -> CharDiffResponse:
    """Character-level edit script for a pair of lines"""
    return CharDiffResponse(chars=get_diff_generator().diff_chars(request.left, request.right))


@router.post("/rows", response_model=RowsResponse)
def project_rows(request: ProjectRowsRequest) -> RowsResponse:
    """Regroup a line-level edit script into display rows"""
    try:
        rows = get_diff_generator().project_rows(request.ops)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid edit script: {e}")
    return RowsResponse(rows=rows)


@router.post("/preview", response_model=PreviewResponse)
def preview(request: PreviewRequest) -> PreviewResponse:
    """Inline text preview with context lines around changes"""
    if request.context_lines is not None and request.context_lines < 0:
        raise HTTPException(status_code=400, detail="context_lines must be zero or greater")

    generator = get_diff_generator()
    rows = generator.project_rows(generator.diff_lines(request.left, request.right))
    return PreviewResponse(
        preview=generator.render_preview(rows, request.context_lines),
        summary=generator.summarize(rows),
    )
