import logging
import sys
from pathlib import Path

from app import dependencies as deps
from app.errors import ContentSourceError
from app.services.sitemap_service import build_sitemap_entries, render_sitemap_xml
from app.settings import settings

logger = logging.getLogger(__name__)


def generate_sitemap(repo, output_dir: Path, hostname: str) -> Path:
    """Build the post index from ``repo`` and write ``sitemap.xml``."""
    index = deps.get_post_index(repo)
    xml = render_sitemap_xml(build_sitemap_entries(index), hostname)

    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / "sitemap.xml"
    target.write_text(xml, encoding="utf-8")
    logger.info(f"Sitemap with {len(index)} posts written to {target}")
    return target


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    output = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("dist")
    repo_gen = deps.get_posts_repo(settings)
    try:
        generate_sitemap(next(repo_gen), output, settings.SITE_URL)
    except ContentSourceError as e:
        logger.error(f"Sitemap generation failed: {e}", exc_info=True)
        sys.exit(1)
    finally:
        repo_gen.close()
