import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from quickpost import dependencies as deps
from quickpost.services.image_service import ImageService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/images/{image_path:path}")
def get_image(
    image_path: str, service: ImageService = Depends(deps.get_image_service)
):
    """
    Serve an uploaded image from its post folder
    """
    image_data, content_type = service.get_image(image_path)

    if not image_data or not content_type:
        raise HTTPException(status_code=404, detail="Image not found")

    headers = {
        "Content-Length": str(len(image_data)),
        "Accept-Ranges": "bytes",
    }

    return Response(content=image_data, media_type=content_type, headers=headers)
