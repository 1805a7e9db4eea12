import logging
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from app import dependencies as deps
from app.schemas.sitemap import SitemapEntry
from app.services.post_index import PostIndex
from app.services.sitemap_service import build_sitemap_entries, render_sitemap_xml
from app.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/sitemap", response_model=List[SitemapEntry])
def get_sitemap_entries(index: PostIndex = Depends(deps.get_post_index)):
    return build_sitemap_entries(index)


@router.get("/sitemap.xml")
def get_sitemap_xml(
    index: PostIndex = Depends(deps.get_post_index),
    current_settings: Settings = Depends(deps.get_settings),
):
    """Serve the sitemap for search engines."""
    xml = render_sitemap_xml(build_sitemap_entries(index), current_settings.SITE_URL)
    return Response(content=xml, media_type="application/xml")
