from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PostMeta(BaseModel):
    """Contents of a post folder's ``meta.json``."""

    id: str
    slug: str
    title: str
    createdAt: str
    updatedAt: str


class PostSummary(BaseModel):
    id: str
    folder: str
    slug: str
    title: str
    createdAt: str
    updatedAt: str


class PostDetail(PostSummary):
    content: str


class CreatePostRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str
    content: str


class UpdatePostRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    content: Optional[str] = None


class ImageList(BaseModel):
    images: List[str] = Field(default_factory=list)


class UploadResponse(BaseModel):
    path: str
    markdown: str


class PreviewRequest(BaseModel):
    content: str


class PreviewResponse(BaseModel):
    html: str
