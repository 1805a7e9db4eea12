import datetime
import textwrap

from app.repos.posts_repo import SourceFiles
from app.services.post_index import build_index
from app.services.posts_service import PostsService

FIXED_NOW = datetime.datetime(2025, 6, 15, 8, 30, tzinfo=datetime.timezone.utc)


def fixed_clock():
    return FIXED_NOW


def md(raw: str) -> str:
    """Dedent an inline markdown fixture."""
    return textwrap.dedent(raw).lstrip()


def post_file(title=None, date=None, tags=None, description=None, body="Body text.", **extra):
    lines = ["---"]
    if title is not None:
        lines.append(f"title: {title}")
    if date is not None:
        lines.append(f"date: {date}")
    if description is not None:
        lines.append(f"description: {description}")
    if tags is not None:
        lines.append(f"tags: [{', '.join(tags)}]")
    for key, value in extra.items():
        lines.append(f"{key}: {value}")
    lines.append("---")
    lines.append(body)
    return "\n".join(lines) + "\n"


SAMPLE_FILES = {
    "a.md": post_file(title="Post A", date="2024-01-01", tags=["Tech", "AI"]),
    "b.md": post_file(title="Post B", date="2024-03-01", tags=["tech"]),
    "c.md": "---\ntitle: Broken\ndate: 2024-02-01\nNo closing delimiter here.\n",
}


def make_index(files=None, **kwargs):
    kwargs.setdefault("now", fixed_clock)
    return build_index(SAMPLE_FILES if files is None else files, **kwargs)


def make_service(files=None):
    return PostsService(make_index(files))


class FakeRepo:
    """
    Minimal content source stand-in used in dependency and router tests.
    """

    def __init__(self, files=None, errors=None, exc=None):
        self.files = files or {}
        self.errors = errors or {}
        self.exc = exc
        self.calls = 0

    def fetch_files(self):
        self.calls += 1
        if self.exc:
            raise self.exc
        return SourceFiles(files=dict(self.files), errors=dict(self.errors))
