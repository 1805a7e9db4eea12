from fastapi import Depends

from app.repos.posts_repo import GitHubPostsRepo, LocalPostsRepo
from app.services.post_index import PostIndex, build_index
from app.services.posts_service import PostsService
from app.settings import Settings, settings


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def get_posts_repo(current_settings: Settings = Depends(get_settings)):
    if current_settings.CONTENT_SOURCE == "github":
        repo = GitHubPostsRepo(
            contents_url=current_settings.github_contents_url,
            posts_path=current_settings.GITHUB_POSTS_PATH,
            token=current_settings.GITHUB_TOKEN,
            user_agent=current_settings.GITHUB_USER_AGENT,
            extensions=current_settings.CONTENT_EXTENSIONS,
            timeout=current_settings.GITHUB_TIMEOUT,
            max_workers=current_settings.GITHUB_MAX_WORKERS,
        )
        try:
            yield repo
        finally:
            repo.close()
    else:
        yield LocalPostsRepo(
            current_settings.CONTENT_DIR, current_settings.CONTENT_EXTENSIONS
        )


def get_post_index(repo=Depends(get_posts_repo)) -> PostIndex:
    source = repo.fetch_files()
    return build_index(source.files, errors=source.errors)


def get_posts_service(index: PostIndex = Depends(get_post_index)) -> PostsService:
    return PostsService(index)
