import logging
from typing import Iterable, List, Optional

from app.schemas.blog import Post
from app.schemas.search import EasterEggResult, SearchResponse
from app.services.easter_eggs import check_for_easter_egg

logger = logging.getLogger(__name__)


def search_posts(
    query: Optional[str], corpus: Iterable[Post], include_body: bool = False
) -> List[Post]:
    """
    Case-insensitive substring filter over title, description and tags.

    The corpus order is kept; a blank query returns every post.
    """
    posts = list(corpus)
    needle = (query or "").strip().lower()
    if not needle:
        return posts

    return [post for post in posts if _matches(post, needle, include_body)]


def search(
    query: Optional[str], corpus: Iterable[Post], include_body: bool = False
) -> SearchResponse:
    """Filter the corpus and look for an easter egg in the same query."""
    results = search_posts(query, corpus, include_body=include_body)
    easter_egg: EasterEggResult = check_for_easter_egg(query or "")
    logger.debug(f"Search {query!r} matched {len(results)} posts")
    return SearchResponse(
        query=query or "",
        results=[post.summary() for post in results],
        easterEgg=easter_egg,
    )


def _matches(post: Post, needle: str, include_body: bool) -> bool:
    if needle in post.title.lower():
        return True
    if post.description and needle in post.description.lower():
        return True
    if any(needle in tag.lower() for tag in post.tags):
        return True
    if include_body and needle in post.body.lower():
        return True
    return False
