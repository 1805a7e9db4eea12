from pathlib import Path
from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Content source
    CONTENT_SOURCE: Literal["local", "github"] = "local"
    CONTENT_DIR: str = "content/posts"
    CONTENT_EXTENSIONS: List[str] = [".md", ".mdx"]

    # GitHub
    GITHUB_TOKEN: str = ""
    GITHUB_OWNER: str = ""
    GITHUB_REPO: str = ""
    GITHUB_POSTS_PATH: str = "content/posts"
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_USER_AGENT: str = "aliceblog v1.0"
    GITHUB_TIMEOUT: float = 10.0
    GITHUB_MAX_WORKERS: int = 8

    # Blog
    SITE_URL: str = "https://aliceleiserblog.netlify.app"
    RELATED_POSTS_LIMIT: int = 3
    SEARCH_INCLUDE_BODY: bool = False
    CORS_ALLOW_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def github_contents_url(self) -> str:
        base = self.GITHUB_API_URL.rstrip("/")
        return f"{base}/repos/{self.GITHUB_OWNER}/{self.GITHUB_REPO}/contents"


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
