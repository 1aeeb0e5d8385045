from fastapi import APIRouter

from quickpost.schemas.blog import PreviewRequest, PreviewResponse
from quickpost.services.markdown_renderer import render

router = APIRouter()


@router.post("/preview", response_model=PreviewResponse)
def preview(payload: PreviewRequest):
    """Render editor markdown to sanitized HTML."""
    return PreviewResponse(html=render(payload.content))
