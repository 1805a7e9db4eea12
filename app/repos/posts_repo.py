import base64
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import httpx

from app.errors import ContentSourceError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".md", ".mdx")


@dataclass
class SourceFiles:
    """Raw post files keyed by path, plus the paths that could not be read."""

    files: Dict[str, str] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)


class LocalPostsRepo:
    def __init__(self, content_dir, extensions: Sequence[str] = DEFAULT_EXTENSIONS):
        self.content_dir = Path(content_dir)
        self.extensions = tuple(extensions)

    def fetch_files(self) -> SourceFiles:
        if not self.content_dir.is_dir():
            raise ContentSourceError(
                str(self.content_dir), "content directory does not exist"
            )

        try:
            paths = sorted(
                p
                for p in self.content_dir.rglob("*")
                if p.is_file() and p.name.endswith(self.extensions)
            )
        except OSError as e:
            raise ContentSourceError(str(self.content_dir), str(e)) from e

        logger.debug(f"Discovered {len(paths)} post files in {self.content_dir}")
        result = SourceFiles()
        for path in paths:
            key = path.relative_to(self.content_dir).as_posix()
            try:
                result.files[key] = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.error(f"Failed to read post file {path}: {e}")
                result.errors[key] = f"unreadable: {e}"
        return result


class GitHubPostsRepo:
    """
    Reads posts through the GitHub contents API. File bodies arrive
    Base64-encoded and are decoded as UTF-8.
    """

    def __init__(
        self,
        contents_url: str,
        posts_path: str,
        token: str = "",
        user_agent: str = "aliceblog v1.0",
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
        timeout: float = 10.0,
        max_workers: int = 8,
        client: Optional[httpx.Client] = None,
    ):
        self.contents_url = contents_url.rstrip("/")
        self.posts_path = posts_path.strip("/")
        self.extensions = tuple(extensions)
        self.max_workers = max(1, max_workers)

        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": user_agent,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.client = client or httpx.Client(headers=headers, timeout=timeout)
        if client is not None:
            self.client.headers.update(headers)

    def fetch_files(self) -> SourceFiles:
        try:
            paths = self._list_posts(self.posts_path)
        except (
            httpx.HTTPError,
            ValueError,
            KeyError,
            AttributeError,
            TypeError,
        ) as e:
            logger.error(f"Failed to list posts at {self.posts_path}: {e}")
            raise ContentSourceError(self.contents_url, str(e)) from e

        logger.debug(f"Discovered {len(paths)} post files on GitHub")
        result = SourceFiles()
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            # map() yields in submission order, keeping listing order
            for path, (content, error) in zip(paths, pool.map(self._fetch_one, paths)):
                key = self._relative(path)
                if error is not None:
                    result.errors[key] = error
                else:
                    result.files[key] = content
        return result

    def _list_posts(self, directory: str) -> List[str]:
        response = self.client.get(f"{self.contents_url}/{directory}")
        response.raise_for_status()
        entries = response.json()
        if isinstance(entries, dict):
            entries = [entries]

        paths: List[str] = []
        for entry in entries:
            if entry.get("type") == "dir":
                paths.extend(self._list_posts(entry["path"]))
            elif entry.get("type") == "file" and entry.get("name", "").endswith(
                self.extensions
            ):
                paths.append(entry["path"])
        return paths

    def _fetch_one(self, path: str):
        try:
            return self._get_content(path), None
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to fetch post file {path}: {e}")
            return None, f"unreadable: {e}"

    def _get_content(self, path: str) -> str:
        response = self.client.get(f"{self.contents_url}/{path}")
        response.raise_for_status()
        payload = response.json()
        raw = base64.b64decode(payload.get("content", ""))
        return raw.decode("utf-8")

    def _relative(self, path: str) -> str:
        prefix = f"{self.posts_path}/"
        return path[len(prefix):] if path.startswith(prefix) else path

    def close(self):
        self.client.close()
