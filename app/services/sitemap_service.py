import logging
from typing import Iterable, List
from xml.etree import ElementTree

from app.schemas.sitemap import SitemapEntry
from app.services.post_index import PostIndex

logger = logging.getLogger(__name__)

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"

STATIC_ROUTES = [
    SitemapEntry(url="/", changefreq="daily", priority=1.0),
    SitemapEntry(url="/blog", changefreq="weekly", priority=0.9),
    SitemapEntry(url="/contact", changefreq="weekly", priority=0.7),
]


def build_sitemap_entries(index: PostIndex) -> List[SitemapEntry]:
    entries = [entry.model_copy() for entry in STATIC_ROUTES]
    entries.extend(
        SitemapEntry(
            url=f"/blog/{post.id}",
            changefreq="weekly",
            priority=0.8,
            lastmod=post.date,
        )
        for post in index
    )
    return entries


def render_sitemap_xml(entries: Iterable[SitemapEntry], hostname: str) -> str:
    """Serialize entries as a sitemaps.org ``urlset`` document."""
    base = hostname.rstrip("/")
    urlset = ElementTree.Element("urlset", xmlns=SITEMAP_NAMESPACE)
    count = 0
    for entry in entries:
        url = ElementTree.SubElement(urlset, "url")
        ElementTree.SubElement(url, "loc").text = f"{base}{entry.url}"
        if entry.lastmod:
            ElementTree.SubElement(url, "lastmod").text = entry.lastmod
        ElementTree.SubElement(url, "changefreq").text = entry.changefreq
        ElementTree.SubElement(url, "priority").text = f"{entry.priority:.1f}"
        count += 1

    logger.debug(f"Rendered sitemap with {count} urls")
    body = ElementTree.tostring(urlset, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}'
