import logging
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import Response

from quickpost import dependencies as deps
from quickpost.schemas.blog import (
    CreatePostRequest,
    ImageList,
    PostDetail,
    PostSummary,
    UpdatePostRequest,
    UploadResponse,
)
from quickpost.services.image_service import (
    ALLOWED_IMAGE_TYPES,
    ImageService,
    extension_for_content_type,
    markdown_for_image,
)
from quickpost.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts", response_model=List[PostSummary])
def list_posts(service: PostsService = Depends(deps.get_posts_service)):
    """List post metadata, newest first."""
    try:
        return service.list()
    except OSError as e:
        logger.error(f"Failed to list posts: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/posts/{slug}", response_model=PostDetail)
def get_post(slug: str, service: PostsService = Depends(deps.get_posts_service)):
    """Get a single post, content included."""
    try:
        post = service.get(slug)
    except OSError as e:
        logger.error(f"Failed to read post {slug}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.post(
    "/posts", response_model=PostDetail, status_code=status.HTTP_201_CREATED
)
def create_post(
    payload: CreatePostRequest,
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        return service.create(payload.title, payload.content)
    except OSError as e:
        logger.error(f"Failed to create post {payload.title!r}: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/posts/{slug}", response_model=PostDetail)
def update_post(
    slug: str,
    payload: UpdatePostRequest,
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        post = service.update(slug, title=payload.title, content=payload.content)
    except OSError as e:
        logger.error(f"Failed to update post {slug}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.delete("/posts/{slug}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(slug: str, service: PostsService = Depends(deps.get_posts_service)):
    try:
        deleted = service.delete(slug)
    except OSError as e:
        logger.error(f"Failed to delete post {slug}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Post not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/posts/{slug}/upload", response_model=ImageList)
def list_post_images(
    slug: str, images: ImageService = Depends(deps.get_image_service)
):
    """List the images uploaded for a post."""
    try:
        paths = images.list_images(slug)
    except OSError as e:
        logger.error(f"Failed to list images for {slug}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    if paths is None:
        raise HTTPException(status_code=400, detail="Post not found")
    return ImageList(images=paths)


@router.post(
    "/posts/{slug}/upload",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
)
def upload_post_image(
    slug: str,
    file: UploadFile = File(...),
    images: ImageService = Depends(deps.get_image_service),
):
    """Attach an image to a post and return the markdown to embed it."""
    extension = extension_for_content_type(file.content_type)
    if not extension:
        allowed = ", ".join(sorted(ALLOWED_IMAGE_TYPES))
        raise HTTPException(
            status_code=400,
            detail=f"Invalid file type {file.content_type!r}. Allowed: {allowed}",
        )

    data = file.file.read()
    if not data:
        raise HTTPException(status_code=400, detail="Empty file")

    try:
        path = images.upload_image(slug, data, extension)
    except OSError as e:
        logger.error(f"Failed to store image for {slug}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    if not path:
        raise HTTPException(status_code=400, detail="Post not found")

    alt = (file.filename or "").rsplit(".", 1)[0]
    return UploadResponse(path=path, markdown=markdown_for_image(path, alt))
