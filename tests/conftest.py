"""Shared fixtures: in-memory database, seeded users and feeds, fake feed server."""

from datetime import datetime
from typing import Optional
from unittest.mock import MagicMock, Mock, patch

import httpx
import pytest

import syndication.config as config_module
from syndication.config import Config, DatabaseConfig, LoggingConfig, SyncConfig
from syndication.models import CategoryCreate, FeedCreate, UserCreate
from syndication.storage import DatabaseFeedStore, DatabaseManager
from syndication.storage.repositories import CategoryRepository, FeedRepository, UserRepository


def rss_document(
    items: list[dict],
    title: str = "Example Feed",
    description: str = "Example news",
    link: str = "https://example.com/",
    last_build_date: Optional[str] = None,
    pub_date: Optional[str] = None,
    ttl: Optional[int] = None,
) -> str:
    """Render a small RSS 2.0 document.

    Each item dict may hold title, link, guid, description and pub_date.
    """
    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<rss version="2.0"><channel>',
        f"<title>{title}</title>",
        f"<link>{link}</link>",
        f"<description>{description}</description>",
    ]
    if last_build_date:
        parts.append(f"<lastBuildDate>{last_build_date}</lastBuildDate>")
    if pub_date:
        parts.append(f"<pubDate>{pub_date}</pubDate>")
    if ttl is not None:
        parts.append(f"<ttl>{ttl}</ttl>")

    for item in items:
        parts.append("<item>")
        for key, tag in (
            ("title", "title"),
            ("link", "link"),
            ("guid", "guid"),
            ("description", "description"),
            ("pub_date", "pubDate"),
        ):
            if item.get(key):
                parts.append(f"<{tag}>{item[key]}</{tag}>")
        parts.append("</item>")

    parts.append("</channel></rss>")
    return "\n".join(parts)


def make_items(count: int, prefix: str = "post", with_guid: bool = True) -> list[dict]:
    """Build ``count`` distinct item dicts."""
    items = []
    for i in range(1, count + 1):
        item = {
            "title": f"{prefix.title()} {i}",
            "link": f"https://example.com/{prefix}/{i}",
            "description": f"Body of {prefix} {i}",
        }
        if with_guid:
            item["guid"] = f"https://example.com/{prefix}/{i}#guid"
        items.append(item)
    return items


class FakeFeedServer:
    """Stands in for ``httpx.Client``: serves canned bodies and records requests."""

    def __init__(self):
        self.routes: dict[str, object] = {}
        self.requests: list[tuple[str, dict]] = []

    def serve(self, url: str, body: str = "", status: int = 200, etag: Optional[str] = None) -> None:
        """Serve ``body`` at ``url``; a matching If-None-Match gets an empty 304."""
        self.routes[url] = (status, body, etag)

    def fail(self, url: str, error: Exception) -> None:
        """Raise ``error`` for requests to ``url``."""
        self.routes[url] = error

    def requests_to(self, url: str) -> list[dict]:
        """Headers of every request made to ``url``."""
        return [headers for requested, headers in self.requests if requested == url]

    def get(self, url: str, headers: Optional[dict] = None):
        headers = dict(headers or {})
        self.requests.append((url, headers))

        route = self.routes.get(url)
        if route is None:
            raise httpx.ConnectError(f"Name or service not known: {url}")
        if isinstance(route, Exception):
            raise route

        status, body, etag = route
        response = MagicMock()
        response.headers = {"ETag": etag} if etag else {}

        if etag and headers.get("If-None-Match") == etag:
            response.status_code = 304
            response.content = b""
        else:
            response.status_code = status
            response.content = body.encode("utf-8")

        return response


@pytest.fixture(autouse=True)
def test_config():
    """Install a global config that never touches the filesystem."""
    config = Config(
        database=DatabaseConfig(path=":memory:"),
        logging=LoggingConfig(file_enabled=False),
        sync=SyncConfig(),
    )
    previous = config_module._config
    config_module._config = config
    yield config
    config_module._config = previous


@pytest.fixture
def feed_server():
    """Patch httpx.Client in the fetcher with a FakeFeedServer."""
    server = FakeFeedServer()

    with patch("syndication.core.fetcher.httpx.Client") as mock_client_class:
        mock_client = MagicMock()
        mock_client.get.side_effect = server.get
        mock_client.__enter__ = Mock(return_value=mock_client)
        mock_client.__exit__ = Mock(return_value=False)
        mock_client_class.return_value = mock_client
        yield server


@pytest.fixture
def db_manager():
    """Create a test database manager."""
    manager = DatabaseManager(":memory:")
    manager.init_db()
    yield manager
    manager.close()


@pytest.fixture
def store(db_manager: DatabaseManager) -> DatabaseFeedStore:
    """Database-backed feed store."""
    return DatabaseFeedStore(db_manager)


@pytest.fixture
def user(db_manager: DatabaseManager):
    """A registered user with the default uncategorized category."""
    with db_manager.session() as session:
        return UserRepository(session).create(UserCreate(username="alice", email="alice@example.com"))


@pytest.fixture
def other_user(db_manager: DatabaseManager):
    """A second registered user."""
    with db_manager.session() as session:
        return UserRepository(session).create(UserCreate(username="bob"))


@pytest.fixture
def category(db_manager: DatabaseManager, user):
    """A "tech" category owned by ``user``."""
    with db_manager.session() as session:
        return CategoryRepository(session).create(CategoryCreate(name="tech"), user.id)


@pytest.fixture
def make_feed(db_manager: DatabaseManager):
    """Factory creating a persisted feed for a user."""

    def _make_feed(
        owner,
        subscription: str,
        category=None,
        title: str = "",
        last_updated: Optional[datetime] = None,
        etag: str = "",
    ):
        with db_manager.session() as session:
            return FeedRepository(session).create(
                FeedCreate(
                    subscription=subscription,
                    title=title,
                    category_id=category.id if category else None,
                    last_updated=last_updated,
                    etag=etag,
                ),
                owner.id,
            )

    return _make_feed
