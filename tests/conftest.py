import itertools

import pytest
from fastapi.testclient import TestClient

from quickpost.main import create_app
from quickpost.repos.posts_repo import PostsRepo
from quickpost.services import posts_service as posts_service_module
from quickpost.services.image_service import ImageService
from quickpost.services.posts_service import PostsService
from quickpost.settings import Settings

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


@pytest.fixture
def posts_dir(tmp_path):
    return tmp_path / "posts"


@pytest.fixture
def repo(posts_dir):
    return PostsRepo(posts_dir)


@pytest.fixture
def service(repo):
    return PostsService(repo)


@pytest.fixture
def image_service(repo):
    return ImageService(repo)


@pytest.fixture
def app_settings(posts_dir):
    return Settings(POSTS_DIR=str(posts_dir))


@pytest.fixture
def client(app_settings):
    return TestClient(create_app(app_settings))


@pytest.fixture
def ticking_clock(monkeypatch):
    """
    Make the posts service hand out strictly increasing timestamps.
    """
    counter = itertools.count(1)

    def fake_now():
        return f"2024-01-01T00:00:{next(counter):02d}.000Z"

    monkeypatch.setattr(posts_service_module, "utc_now_iso", fake_now)
    return fake_now


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(self, error: Exception):
        self.error = error

    def list(self):
        raise self.error

    def get(self, slug):
        raise self.error

    def create(self, title, content):
        raise self.error

    def update(self, slug, title=None, content=None):
        raise self.error

    def delete(self, slug):
        raise self.error
