import logging
import re
from typing import Dict, List, Optional

from app.schemas.blog import AdjacentPosts, Post, TagSummary
from app.services.post_index import PostIndex, normalize_tags, parse_timestamp

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400


class PostsService:
    """Read-only queries over a built PostIndex."""

    def __init__(self, index: PostIndex):
        self.index = index

    def get_all(self) -> List[Post]:
        return list(self.index.posts)

    def get_by_id(self, post_id: str) -> Optional[Post]:
        position = self.index.position(post_id)
        if position is None:
            logger.debug(f"Post not found: {post_id}")
            return None
        return self.index[position]

    def get_adjacent(self, post_id: str) -> AdjacentPosts:
        """
        Chronological neighbours of a post. The index is newest first, so
        ``prev`` is the next entry (older) and ``next`` the previous one
        (newer). Unknown ids get two empty slots.
        """
        position = self.index.position(post_id)
        if position is None:
            return AdjacentPosts()

        older = position + 1
        newer = position - 1
        return AdjacentPosts(
            prev=self.index[older] if older < len(self.index) else None,
            next=self.index[newer] if newer >= 0 else None,
        )

    def get_by_tag(self, tag: Optional[str]) -> List[Post]:
        normalized = normalize_tags(tag)
        if not normalized:
            return []
        wanted = normalized[0]
        return [post for post in self.index if wanted in post.tags]

    def get_all_tags(self) -> List[TagSummary]:
        counts: Dict[str, int] = {}
        for post in self.index:
            for tag in post.tags:
                counts[tag] = counts.get(tag, 0) + 1

        # dicts keep insertion order, and sorted() is stable
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return [
            TagSummary(name=name, count=count, slug=slugify(name))
            for name, count in ranked
        ]

    def get_related(self, post: Post, limit: int = 3) -> List[Post]:
        """
        Rank other posts by ``2 * shared tags + 1 / (1 + days_apart / 30)``.
        Shared tags dominate; closeness in time only separates equal overlap.
        """
        if limit <= 0:
            return []

        tags = set(post.tags)
        published = parse_timestamp(post.date)
        scored = []
        for candidate in self.index:
            if candidate.id == post.id:
                continue
            shared = len(tags.intersection(candidate.tags))
            days_apart = (
                abs((parse_timestamp(candidate.date) - published).total_seconds())
                / SECONDS_PER_DAY
            )
            score = 2 * shared + 1 / (1 + days_apart / 30)
            scored.append((score, candidate))

        scored.sort(key=lambda item: item[0], reverse=True)
        return [candidate for _, candidate in scored[:limit]]


def slugify(value: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", value.strip().lower())
    return slug.strip("-")
