import base64

import httpx
import pytest

from app.errors import ContentSourceError
from app.repos.posts_repo import GitHubPostsRepo, LocalPostsRepo, SourceFiles
from tests.conftest import post_file

CONTENTS_URL = "https://api.github.test/repos/alice/blog/contents"


def _encode(text: str) -> str:
    # GitHub wraps Base64 payloads at 60 characters
    raw = base64.b64encode(text.encode("utf-8")).decode()
    return "\n".join(raw[i : i + 60] for i in range(0, len(raw), 60))


def make_github_repo(handler, **kwargs):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return GitHubPostsRepo(CONTENTS_URL, "content/posts", client=client, **kwargs)


def test_local_repo_reads_markdown_recursively(tmp_path):
    (tmp_path / "2024").mkdir()
    (tmp_path / "hello.md").write_text(post_file(title="Hello"), encoding="utf-8")
    (tmp_path / "2024" / "deep.mdx").write_text(post_file(title="Deep"), encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

    result = LocalPostsRepo(tmp_path).fetch_files()

    assert isinstance(result, SourceFiles)
    assert list(result.files) == ["2024/deep.mdx", "hello.md"]
    assert "title: Hello" in result.files["hello.md"]
    assert result.errors == {}


def test_local_repo_respects_extensions(tmp_path):
    (tmp_path / "a.md").write_text(post_file(title="A"), encoding="utf-8")
    (tmp_path / "b.mdx").write_text(post_file(title="B"), encoding="utf-8")

    result = LocalPostsRepo(tmp_path, extensions=[".md"]).fetch_files()

    assert list(result.files) == ["a.md"]


def test_local_repo_empty_directory(tmp_path):
    result = LocalPostsRepo(tmp_path).fetch_files()

    assert result.files == {}
    assert result.errors == {}


def test_local_repo_missing_directory_raises(tmp_path):
    with pytest.raises(ContentSourceError) as excinfo:
        LocalPostsRepo(tmp_path / "missing").fetch_files()

    assert "does not exist" in excinfo.value.reason


def test_local_repo_records_undecodable_file(tmp_path):
    (tmp_path / "good.md").write_text(post_file(title="Good"), encoding="utf-8")
    (tmp_path / "bad.md").write_bytes(b"---\ntitle: \xff\xfe\n---\n")

    result = LocalPostsRepo(tmp_path).fetch_files()

    assert list(result.files) == ["good.md"]
    assert result.errors["bad.md"].startswith("unreadable")


def test_github_repo_lists_and_decodes_files():
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        requested.append(path)
        if path.endswith("/contents/content/posts"):
            return httpx.Response(
                200,
                json=[
                    {"type": "file", "name": "hello.md", "path": "content/posts/hello.md"},
                    {"type": "dir", "name": "2024", "path": "content/posts/2024"},
                    {"type": "file", "name": "image.png", "path": "content/posts/image.png"},
                ],
            )
        if path.endswith("/contents/content/posts/2024"):
            return httpx.Response(
                200,
                json=[{"type": "file", "name": "deep.mdx", "path": "content/posts/2024/deep.mdx"}],
            )
        if path.endswith("hello.md"):
            return httpx.Response(200, json={"content": _encode(post_file(title="Héllo"))})
        if path.endswith("deep.mdx"):
            return httpx.Response(200, json={"content": _encode(post_file(title="Deep"))})
        return httpx.Response(404)

    repo = make_github_repo(handler)
    result = repo.fetch_files()

    assert list(result.files) == ["hello.md", "2024/deep.mdx"]
    assert "title: Héllo" in result.files["hello.md"]
    assert result.errors == {}
    assert not any(p.endswith("image.png") for p in requested)


def test_github_repo_records_per_file_failures():
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith("/contents/content/posts"):
            return httpx.Response(
                200,
                json=[
                    {"type": "file", "name": "ok.md", "path": "content/posts/ok.md"},
                    {"type": "file", "name": "boom.md", "path": "content/posts/boom.md"},
                ],
            )
        if path.endswith("ok.md"):
            return httpx.Response(200, json={"content": _encode(post_file(title="Ok"))})
        return httpx.Response(500)

    result = make_github_repo(handler, max_workers=2).fetch_files()

    assert list(result.files) == ["ok.md"]
    assert result.errors["boom.md"].startswith("unreadable")


def test_github_repo_listing_failure_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"message": "rate limited"})

    with pytest.raises(ContentSourceError):
        make_github_repo(handler).fetch_files()


@pytest.mark.parametrize(
    "listing",
    [
        ["not-a-dict"],
        [{"type": "file", "name": "no-path.md"}],
        [{"type": "dir", "name": "nested"}],
        42,
    ],
)
def test_github_repo_malformed_listing_raises(listing):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=listing)

    with pytest.raises(ContentSourceError):
        make_github_repo(handler).fetch_files()


def test_github_repo_connection_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    with pytest.raises(ContentSourceError):
        make_github_repo(handler).fetch_files()


def test_github_repo_sends_auth_and_user_agent():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.headers)
        return httpx.Response(200, json=[])

    repo = make_github_repo(handler, token="secret", user_agent="test-agent")
    result = repo.fetch_files()

    assert result.files == {}
    assert seen["authorization"] == "Bearer secret"
    assert seen["user-agent"] == "test-agent"


def test_github_repo_omits_auth_without_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.headers)
        return httpx.Response(200, json=[])

    make_github_repo(handler).fetch_files()

    assert "authorization" not in seen
