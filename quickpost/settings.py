import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_PORT = 7777
DEFAULT_POSTS_DIR = "posts"


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = DEFAULT_PORT
    AUTO_OPEN: bool = True

    # Storage
    POSTS_DIR: str = DEFAULT_POSTS_DIR
    STATIC_DIR: Optional[str] = None

    # Config file with {"port", "autoOpen"}
    CONFIG_FILE: str = "config.json"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def posts_path(self) -> Path:
        return Path(self.POSTS_DIR).resolve()

    @property
    def static_path(self) -> Path:
        if self.STATIC_DIR:
            return Path(self.STATIC_DIR).resolve()
        return Path(__file__).parent / "static"


class FileConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    port: Optional[int] = None
    autoOpen: Optional[bool] = None


def load_file_config(path) -> FileConfig:
    """Read the JSON config file; a missing or broken file means no overrides."""
    path = Path(path)
    try:
        return FileConfig.model_validate_json(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return FileConfig()
    except (OSError, ValidationError) as e:
        logger.warning(f"Ignoring config file {path}: {e}")
        return FileConfig()


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
