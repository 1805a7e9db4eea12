import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from app import dependencies as deps
from app.schemas.blog import AdjacentPosts, Post, PostSummary, TagSummary
from app.services.posts_service import PostsService
from app.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()

SKIPPED_HEADER = "X-Posts-Skipped"


@router.get("/posts", response_model=List[PostSummary])
def list_posts(
    response: Response,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get all posts metadata, newest first."""
    try:
        response.headers[SKIPPED_HEADER] = str(len(service.index.skipped))
        return [post.summary() for post in service.get_all()]
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/{post_id}", response_model=Post)
def get_post(
    post_id: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a single post by id."""
    try:
        post = service.get_by_id(post_id)
        if post is None:
            raise HTTPException(status_code=404, detail="Post not found")
        return post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {post_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


@router.get("/posts/{post_id}/adjacent", response_model=AdjacentPosts)
def get_adjacent_posts(
    post_id: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        adjacent = service.get_adjacent(post_id)
        return AdjacentPosts(
            prev=adjacent.prev.summary() if adjacent.prev else None,
            next=adjacent.next.summary() if adjacent.next else None,
        )
    except Exception as e:
        logger.error(f"Unexpected error retrieving adjacent posts for {post_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/{post_id}/related", response_model=List[PostSummary])
def get_related_posts(
    post_id: str,
    limit: Optional[int] = Query(None, ge=1, le=20),
    service: PostsService = Depends(deps.get_posts_service),
    current_settings: Settings = Depends(deps.get_settings),
):
    post = service.get_by_id(post_id)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    try:
        related = service.get_related(
            post, limit or current_settings.RELATED_POSTS_LIMIT
        )
        return [p.summary() for p in related]
    except Exception as e:
        logger.error(f"Unexpected error ranking posts related to {post_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/tags", response_model=List[TagSummary])
def list_tags(service: PostsService = Depends(deps.get_posts_service)):
    return service.get_all_tags()


@router.get("/tags/{tag}/posts", response_model=List[PostSummary])
def list_posts_by_tag(
    tag: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    return [post.summary() for post in service.get_by_tag(tag)]
