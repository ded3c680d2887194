"""
Caption generation routes
"""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from socialrelay.core.dependencies import get_caption_generator
from socialrelay.schemas.captions import CaptionRequest, CaptionResponse
from socialrelay.services.captions import CaptionGenerator

router = APIRouter()


@router.post("/generate-caption", response_model=CaptionResponse, response_model_exclude_none=True)
async def generate_caption(
    body: CaptionRequest,
    generator: CaptionGenerator = Depends(get_caption_generator),
):
    topic = (body.topic or "").strip()
    if not topic:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Topic is required"},
        )
    result = await generator.generate(topic)
    return CaptionResponse(captions=result.captions, warning=result.warning)
