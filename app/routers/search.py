import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app import dependencies as deps
from app.schemas.search import SearchResponse
from app.services.posts_service import PostsService
from app.services.search_service import search
from app.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/search", response_model=SearchResponse)
def search_posts(
    q: Optional[str] = Query(None, max_length=200),
    service: PostsService = Depends(deps.get_posts_service),
    current_settings: Settings = Depends(deps.get_settings),
):
    """Filter posts by a query string and report any easter egg it triggers."""
    try:
        return search(
            q,
            service.get_all(),
            include_body=current_settings.SEARCH_INCLUDE_BODY,
        )
    except Exception as e:
        logger.error(f"Unexpected error searching posts for {q!r}: {e}")
        raise HTTPException(status_code=500, detail="Search failed")
