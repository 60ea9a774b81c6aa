"""HTTP-level tests for the article server."""

import json
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.server.app import create_app
from src.utils.config import Config
from src.utils.exceptions import ContentLoadError, RenderError
from tests.helpers import article_source


@pytest.fixture
def client(config: Config) -> TestClient:
    return TestClient(create_app(config))


@pytest.fixture
def make_client(config: Config) -> Callable[..., TestClient]:
    def _make(**changes: object) -> TestClient:
        return TestClient(create_app(replace(config, **changes)))

    return _make


class TestPages:
    """Home, index and article views."""

    def test_home_truncated(self, client: TestClient) -> None:
        """Test that the home page shows only the newest home_articles."""
        response = client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"] == "text/html; charset=utf-8"
        assert "Third Post" in response.text
        assert "Second Post" in response.text
        assert "First Post" not in response.text

    def test_home_shows_all_when_fewer(self, make_client: Callable[..., TestClient]) -> None:
        response = make_client(home_articles=10).get("/")

        for title in ("First Post", "Second Post", "Third Post"):
            assert title in response.text

    def test_index_lists_everything(self, client: TestClient) -> None:
        text = client.get("/index").text

        assert text.index("Third Post") < text.index("Second Post") < text.index("First Post")

    def test_article_with_neighbors_and_related(self, client: TestClient) -> None:
        response = client.get("/2024/second")

        assert response.status_code == 200
        assert "<h1>Second Post</h1>" in response.text
        assert 'class="newer" href="/third"' in response.text
        assert 'class="older" href="/2024/first"' in response.text
        assert "Related articles" in response.text
        assert 'href="/2024/first">First Post</a></li>' in response.text

    def test_method_not_distinguished(self, client: TestClient) -> None:
        get = client.get("/2024/second")
        post = client.post("/2024/second")

        assert post.status_code == 200
        assert post.text == get.text

    @pytest.mark.parametrize("method", ["TRACE", "PROPFIND", "PURGE"])
    def test_uncommon_methods_answered(self, client: TestClient, method: str) -> None:
        """Test that verbs outside the usual set are served like GET."""
        get = client.get("/2024/second")
        response = client.request(method, "/2024/second")

        assert response.status_code == 200
        assert response.text == get.text

    def test_template_failure_keeps_server_running(
        self, config: Config, template_dir: Path, tmp_path: Path
    ) -> None:
        """Test that a broken page template is logged, not fatal."""
        target = tmp_path / "templates"
        target.mkdir()
        for template in template_dir.glob("*.html"):
            (target / template.name).write_text(template.read_text(encoding="utf-8"), encoding="utf-8")
        (target / "index.html").write_text(
            '{% extends "root.html" %}{% block content %}{{ data.missing.attribute }}{% endblock %}',
            encoding="utf-8",
        )
        client = TestClient(create_app(replace(config, template_path=target)))

        response = client.get("/index")

        assert response.status_code == 200
        assert "</html>" not in response.text
        assert client.get("/").status_code == 200


class TestFeeds:
    """Atom and JSON endpoints."""

    @pytest.mark.parametrize("path", ["/feed.atom", "/feeds/posts/default"])
    def test_atom(self, client: TestClient, path: str) -> None:
        response = client.get(path)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/atom+xml; charset=utf-8"
        assert b"<feed" in response.content
        assert b"tag:example.com,2013:example.com/third" in response.content

    def test_atom_aliases_identical(self, client: TestClient) -> None:
        assert client.get("/feed.atom").content == client.get("/feeds/posts/default").content

    def test_json(self, client: TestClient) -> None:
        response = client.get("/.json")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json; charset=utf-8"
        items = response.json()
        assert [item["Title"] for item in items] == ["Third Post", "Second Post", "First Post"]
        assert items[2]["Author"] == "Ann, Bo and Cy"

    def test_json_feed_limit(self, make_client: Callable[..., TestClient]) -> None:
        assert len(make_client(feed_articles=1).get("/.json").json()) == 1

    def test_jsonp(self, client: TestClient) -> None:
        plain = client.get("/.json").content
        response = client.get("/.json", params={"jsonp": "cb"})

        assert response.headers["content-type"] == "application/javascript; charset=utf-8"
        assert response.content == b"cb(" + plain + b")"

    def test_jsonp_repeated_parameter_uses_first(self, client: TestClient) -> None:
        plain = client.get("/.json").content
        response = client.get("/.json?jsonp=first&jsonp=second")

        assert response.content == b"first(" + plain + b")"

    def test_jsonp_first_value_invalid(self, client: TestClient) -> None:
        """Test that a valid later callback does not rescue an invalid first one."""
        plain = client.get("/.json").content
        response = client.get("/.json?jsonp=1bad&jsonp=cb")

        assert response.content == plain

    def test_jsonp_invalid_callback(self, client: TestClient) -> None:
        plain = client.get("/.json").content
        response = client.get("/.json", params={"jsonp": "1bad"})

        assert response.headers["content-type"] == "application/json; charset=utf-8"
        assert response.content == plain
        assert json.loads(response.content)


class TestStaticFallback:
    """Non-article paths."""

    def test_static_file(self, client: TestClient) -> None:
        response = client.get("/static/style.css")

        assert response.status_code == 200
        assert "color: black" in response.text

    def test_missing_file(self, client: TestClient) -> None:
        assert client.get("/nope").status_code == 404

    def test_traversal_rejected(self, client: TestClient) -> None:
        assert client.get("/..%2f..%2fetc/passwd").status_code == 404

    def test_raw_article_source_served(self, client: TestClient) -> None:
        """Test that the .article source itself is ordinary static content."""
        response = client.get("/third.article")

        assert response.status_code == 200
        assert "title: Third Post" in response.text


class TestBasePath:
    """Serving under a path prefix."""

    @pytest.fixture
    def based(self, make_client: Callable[..., TestClient]) -> TestClient:
        return make_client(base_path="/blog", base_url="https://example.com/blog")

    def test_routes_under_prefix(self, based: TestClient) -> None:
        assert based.get("/blog/").status_code == 200
        assert based.get("/blog/2024/first").status_code == 200
        assert based.get("/blog/static/style.css").status_code == 200
        assert based.get("/blog/.json").json()[0]["Link"] == "https://example.com/blog/third"

    def test_links_include_prefix(self, based: TestClient) -> None:
        assert 'href="/blog/2024/first"' in based.get("/blog/index").text

    def test_outside_prefix_not_found(self, based: TestClient) -> None:
        assert based.get("/").status_code == 404
        assert based.get("/2024/first").status_code == 404


class TestLoadFailures:
    """Load-phase errors stop app creation."""

    def test_bad_article(self, config: Config) -> None:
        (config.content_path / "bad.article").write_text(
            article_source("Bad", "'whenever'"), encoding="utf-8"
        )

        with pytest.raises(ContentLoadError):
            create_app(config)

    def test_missing_templates(self, config: Config, tmp_path: Path) -> None:
        with pytest.raises(RenderError):
            create_app(replace(config, template_path=tmp_path / "missing"))


class TestConcurrency:
    """Parallel requests against the shared site."""

    def test_parallel_requests_consistent(self, client: TestClient) -> None:
        paths = ["/", "/index", "/.json", "/feed.atom", "/2024/first", "/third"] * 10
        expected = {path: client.get(path).content for path in set(paths)}

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda path: (path, client.get(path).content), paths))

        for path, content in results:
            assert content == expected[path]
