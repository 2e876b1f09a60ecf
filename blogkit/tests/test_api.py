"""Tests for the read API."""

import pytest
from fastapi.testclient import TestClient

from blogkit.api.app import create_app
from blogkit.api.dependencies import SnapshotHolder, get_config, get_holder
from blogkit.config import AppConfig, ContentConfig, FeedConfig
from blogkit.pipeline.pipeline import PublishPipeline
from conftest import make_text


@pytest.fixture
def config():
    return AppConfig(
        content=ContentConfig(content_roots=["content"]),
        feed=FeedConfig(page_size=1),
    )


@pytest.fixture
def holder(tmp_path, content_dir, config):
    return SnapshotHolder(PublishPipeline(config, base_dir=tmp_path).build)


@pytest.fixture
def client(config, holder):
    get_config.cache_clear()
    app = create_app()
    app.dependency_overrides[get_config] = lambda: config
    app.dependency_overrides[get_holder] = lambda: holder
    with TestClient(app) as client:
        yield client
    get_config.cache_clear()


class TestHealth:
    def test_health(self, client):
        """Test health check endpoint."""
        assert client.get("/health").json() == {"status": "healthy"}

    def test_ready_builds_snapshot(self, client):
        """Test readiness builds the snapshot on first use."""
        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json()["documents"] == 3


class TestPosts:
    def test_first_page_uses_configured_size(self, client):
        """Test posts default to the configured page size."""
        data = client.get("/api/v1/posts").json()

        assert [item["title"] for item in data["items"]] == ["Second Post"]
        assert data["total_items"] == 2
        assert data["total_pages"] == 2
        assert data["has_next"] is True
        assert data["has_previous"] is False

    def test_explicit_size(self, client):
        """Test an explicit page size with excerpts."""
        data = client.get("/api/v1/posts", params={"page": 1, "size": 10}).json()

        assert [item["id"] for item in data["items"]] == [
            "posts/2022-10-10-second",
            "posts/2022-10-08-first",
        ]
        assert data["items"][1]["excerpt"] == "Intro paragraph."
        assert "<p>Intro paragraph.</p>" in data["items"][1]["excerpt_html"]

    def test_page_past_end_is_empty(self, client):
        """Test a page past the end returns no items."""
        data = client.get("/api/v1/posts", params={"page": 5}).json()

        assert data["items"] == []
        assert data["has_next"] is False

    @pytest.mark.parametrize("params", [{"page": 0}, {"size": 0}, {"page": -3}])
    def test_invalid_page(self, client, params):
        """Test invalid page parameters map to 400."""
        response = client.get("/api/v1/posts", params=params)

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidPage"

    def test_error_payload_shape(self, client):
        """Query errors carry the documented error body."""
        body = client.get("/api/v1/posts", params={"page": 0}).json()
        schema = client.get("/openapi.json").json()

        assert set(body) == {"error", "detail"}
        assert "ErrorResponse" in schema["components"]["schemas"]

    def test_pages_listing(self, client):
        """Test standalone pages listing."""
        data = client.get("/api/v1/pages").json()

        assert [item["permalink"] for item in data] == ["/about"]


class TestTags:
    def test_list_tags(self, client):
        """Test tag summaries with display names and counts."""
        data = client.get("/api/v1/tags").json()

        assert {(t["name"], t["count"]) for t in data} == {("Python", 2), ("notes", 1)}

    def test_tag_lookup_ignores_case(self, client):
        """Test tag lookup is case-insensitive."""
        data = client.get("/api/v1/tags/PYTHON").json()

        assert data["tag"] == "Python"
        assert len(data["items"]) == 2

    def test_unknown_tag_is_empty(self, client):
        """Test an unknown tag returns an empty list."""
        response = client.get("/api/v1/tags/rust")

        assert response.status_code == 200
        assert response.json() == {"tag": "rust", "items": []}


class TestDocuments:
    def test_document_by_id(self, client):
        """Test fetching a document whose id contains a slash."""
        data = client.get("/api/v1/documents/posts/2022-10-08-first").json()

        assert data["title"] == "First Post"
        assert "<!-- more -->" not in data["body_html"]
        assert data["newer"] == {"title": "Second Post", "permalink": "/2022/10/10/second-post"}
        assert data["older"] is None

    def test_missing_document(self, client):
        """Test unknown document id returns 404."""
        assert client.get("/api/v1/documents/nope").status_code == 404

    def test_permalink_lookup(self, client):
        """Test resolving a permalink to its document."""
        data = client.get("/api/v1/permalink", params={"path": "/about"}).json()

        assert data["id"] == "about"
        assert data["layout_kind"] == "page"

    def test_permalink_missing(self, client):
        """Test unknown permalink returns 404."""
        response = client.get("/api/v1/permalink", params={"path": "/2099/01/01/nothing"})

        assert response.status_code == 404


class TestRebuild:
    def test_rebuild_picks_up_new_content(self, client, content_dir):
        """Test rebuild swaps in a snapshot with new content."""
        assert client.get("/api/v1/posts", params={"size": 10}).json()["total_items"] == 2

        (content_dir / "posts" / "third.md").write_text(make_text("Third Post", date="2022-12-01"))
        response = client.post("/api/v1/rebuild")

        assert response.status_code == 200
        assert response.json()["documents"] == 4
        assert client.get("/api/v1/posts", params={"size": 10}).json()["total_items"] == 3

    def test_failed_rebuild_keeps_previous_snapshot(self, client, content_dir):
        """Test a failed rebuild leaves the served snapshot untouched."""
        client.get("/ready")
        (content_dir / "broken.md").write_text("missing metadata\n")

        response = client.post("/api/v1/rebuild")

        assert response.status_code == 500
        assert response.json()["error"] == "MalformedDocument"
        assert client.get("/ready").json()["documents"] == 3
