import datetime
import logging
import math
import posixpath
from types import MappingProxyType
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Tuple

import yaml
from frontmatter.default_handlers import YAMLHandler

from app.errors import PostParseError
from app.schemas.blog import Post

logger = logging.getLogger(__name__)

POST_EXTENSIONS = (".mdx", ".md")
KNOWN_FIELDS = {"title", "date", "description", "tags", "thumbnail"}

_yaml_handler = YAMLHandler()


class _FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader that keeps dates as plain strings for ``format_date``."""


_FrontMatterLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp)
        for tag, regexp in resolvers
        if tag != "tag:yaml.org,2002:timestamp"
    ]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class PostIndex:
    """
    Immutable, date-sorted collection of posts produced by ``build_index``.

    ``skipped`` maps every source path that did not make it into the index
    to the reason it was left out, so an empty index built from an empty
    source can be told apart from one where every file failed.
    """

    def __init__(self, posts=(), skipped: Optional[Mapping[str, str]] = None):
        self._posts: Tuple[Post, ...] = tuple(posts)
        self._skipped = MappingProxyType(dict(skipped or {}))
        self._positions = {post.id: i for i, post in enumerate(self._posts)}

    @property
    def posts(self) -> Tuple[Post, ...]:
        return self._posts

    @property
    def skipped(self) -> Mapping[str, str]:
        return self._skipped

    @property
    def is_complete(self) -> bool:
        return not self._skipped

    def position(self, post_id: str) -> Optional[int]:
        return self._positions.get(post_id)

    def __len__(self) -> int:
        return len(self._posts)

    def __iter__(self) -> Iterator[Post]:
        return iter(self._posts)

    def __getitem__(self, i: int) -> Post:
        return self._posts[i]

    def __repr__(self) -> str:
        return f"PostIndex(posts={len(self._posts)}, skipped={len(self._skipped)})"


def build_index(
    source_files: Mapping[str, str],
    *,
    errors: Optional[Mapping[str, str]] = None,
    now: Optional[Callable[[], datetime.datetime]] = None,
) -> PostIndex:
    """
    Parse every ``path -> raw text`` entry into a Post and return a fresh
    PostIndex sorted newest first.

    Files that fail to parse are logged and recorded as skipped; ``errors``
    carries read failures reported by the content source so they surface in
    the same place.
    """
    clock = now or _utc_now
    skipped: Dict[str, str] = dict(errors or {})
    posts: List[Post] = []
    seen_ids = set()

    for path, raw in source_files.items():
        try:
            post = parse_post(path, raw, now=clock)
        except PostParseError as e:
            logger.warning(f"Skipping post {path}: {e.reason}")
            skipped[path] = e.reason
            continue

        if post.id in seen_ids:
            logger.warning(f"Skipping post {path}: duplicate id '{post.id}'")
            skipped[path] = f"duplicate id '{post.id}'"
            continue

        seen_ids.add(post.id)
        posts.append(post)

    # sorted() is stable with reverse=True, so ties keep discovery order
    posts = sorted(posts, key=lambda p: parse_timestamp(p.date), reverse=True)
    logger.info(f"Built post index with {len(posts)} posts ({len(skipped)} skipped)")
    return PostIndex(posts, skipped)


def parse_post(
    path: str, raw: str, *, now: Callable[[], datetime.datetime] = None
) -> Post:
    """Turn one content file into a Post, raising PostParseError if unusable."""
    metadata, body = split_front_matter(path, raw)

    post_id = derive_post_id(path)
    extensions = {k: v for k, v in metadata.items() if k not in KNOWN_FIELDS}

    return Post(
        id=post_id,
        fullPath=derive_full_path(path),
        title=derive_title(metadata, post_id),
        description=_optional_str(metadata.get("description")),
        thumbnail=_optional_str(metadata.get("thumbnail")),
        date=format_date(metadata.get("date"), now=now or _utc_now, path=path),
        tags=normalize_tags(metadata.get("tags")),
        body=body,
        readingTime=calculate_reading_time(body),
        extensions=_jsonable(extensions),
    )


def split_front_matter(path: str, raw: str) -> Tuple[dict, str]:
    if raw is None:
        raise PostParseError(path, "no content")
    text = raw.lstrip("\ufeff").strip()
    if not _yaml_handler.detect(text):
        raise PostParseError(path, "missing front matter block")

    try:
        front_matter, body = _yaml_handler.split(text)
    except ValueError:
        raise PostParseError(path, "unterminated front matter block") from None

    try:
        metadata = _yaml_handler.load(front_matter, Loader=_FrontMatterLoader)
    except (yaml.YAMLError, ValueError) as e:
        raise PostParseError(path, f"invalid front matter: {e}") from e

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise PostParseError(path, "front matter is not a mapping")
    return metadata, body.strip()


def derive_post_id(path: str) -> str:
    """Filename without directories or extension."""
    name = posixpath.basename(path.replace("\\", "/"))
    for ext in POST_EXTENSIONS:
        if name.endswith(ext):
            return name[: -len(ext)]
    return name


def derive_full_path(path: str) -> str:
    normalized = path.replace("\\", "/").lstrip("/")
    for ext in POST_EXTENSIONS:
        if normalized.endswith(ext):
            return normalized[: -len(ext)]
    return normalized


def derive_title(metadata: dict, post_id: str) -> str:
    """Get a human-readable title, falling back to the id."""
    if metadata and metadata.get("title"):
        return str(metadata["title"])
    return post_id.replace("-", " ").replace("_", " ").title()


def format_date(
    value,
    *,
    now: Callable[[], datetime.datetime] = None,
    path: str = "",
) -> str:
    """
    Normalize a front-matter date to an ISO-8601 UTC timestamp.

    ``YYYY-MM-DD`` values (strings or YAML dates) become noon UTC so the day
    never shifts across timezones, full ISO timestamps keep their time.
    Missing or malformed values fall back to the current time.
    """
    clock = now or _utc_now

    if value is None or value == "":
        logger.warning(f"No date provided for post {path}, using current time")
        return _to_iso(clock())

    if isinstance(value, datetime.datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=datetime.timezone.utc)
        return _to_iso(value)

    if isinstance(value, datetime.date):
        return _to_iso(_noon_utc(value.year, value.month, value.day))

    text = str(value).strip()
    try:
        year, month, day = (int(part) for part in text.split("-"))
        return _to_iso(_noon_utc(year, month, day))
    except (TypeError, ValueError):
        pass

    try:
        parsed = parse_timestamp(text)
    except ValueError as e:
        logger.warning(f"Invalid date {value!r} for post {path} ({e}), using current time")
        return _to_iso(clock())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return _to_iso(parsed)


def parse_timestamp(value: str) -> datetime.datetime:
    return datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))


def normalize_tags(value) -> List[str]:
    """Lower-case, trim and de-duplicate tags; absent tags become []."""
    if not value:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple, set)):
        value = [value]

    tags: List[str] = []
    for item in value:
        if item is None:
            continue
        tag = str(item).strip().lower()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def calculate_reading_time(text: str) -> str:
    words = text.split()
    minutes = math.ceil(len(words) / 200) or 1
    return f"{minutes} min"


def _noon_utc(year: int, month: int, day: int) -> datetime.datetime:
    return datetime.datetime(year, month, day, 12, tzinfo=datetime.timezone.utc)


def _to_iso(value: datetime.datetime) -> str:
    value = value.astimezone(datetime.timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def _optional_str(value) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _jsonable(value):
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_jsonable(v) for v in value]
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return value
