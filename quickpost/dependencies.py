from fastapi import Depends, Request

from quickpost.repos.posts_repo import PostsRepo
from quickpost.services.image_service import ImageService
from quickpost.services.posts_service import PostsService
from quickpost.settings import Settings


def get_settings(request: Request) -> Settings:
    """Settings the running app was built with."""
    return request.app.state.settings


def get_posts_repo(settings: Settings = Depends(get_settings)):
    return PostsRepo(settings.posts_path)


def get_posts_service(repo=Depends(get_posts_repo)):
    return PostsService(repo)


def get_image_service(repo=Depends(get_posts_repo)):
    return ImageService(repo)
