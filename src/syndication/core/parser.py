"""
Feed document parser.

Turns a raw RSS/Atom response body into a FeedDocument holding only the
fields the synchronization engine consumes.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from html import unescape
from typing import Optional

import feedparser
from bs4 import BeautifulSoup

from syndication.errors import ParseError
from syndication.logger import get_logger
from syndication.utils.time_utils import struct_time_to_datetime

logger = get_logger(__name__)

MAX_TITLE_LENGTH = 1000
MAX_AUTHOR_LENGTH = 500


@dataclass
class RemoteItem:
    """One item of a fetched feed document. Never persisted as-is."""

    guid: str = ""
    title: str = ""
    link: str = ""
    description: str = ""
    author: str = ""
    updated: Optional[datetime] = None
    published: Optional[datetime] = None


@dataclass
class FeedDocument:
    """Parsed representation of a remote feed."""

    title: str = ""
    description: str = ""
    link: str = ""
    updated: Optional[datetime] = None
    ttl: int = 0
    items: list[RemoteItem] = field(default_factory=list)


class FeedDocumentParser:
    """Parser for RSS/Atom documents built on feedparser."""

    def parse(self, content: bytes, url: Optional[str] = None) -> FeedDocument:
        """Parse a response body.

        Args:
            content: Raw response body
            url: Source URL, used in error messages

        Returns:
            FeedDocument with items in document order

        Raises:
            ParseError: If the body is not a recognizable RSS/Atom document
        """
        parsed = feedparser.parse(content)

        if not parsed.get("version"):
            reason = parsed.get("bozo_exception") or "unrecognized feed format"
            raise ParseError(f"Failed to parse feed: {reason}", url=url)

        if parsed.get("bozo"):
            logger.debug(f"Feed {url} is not well-formed: {parsed.get('bozo_exception')}")

        channel = parsed.feed

        return FeedDocument(
            title=self._normalize_title(channel.get("title")),
            description=self._normalize_description(channel.get("description")),
            link=self._normalize_link(channel.get("link")),
            # feedparser answers a missing updated_parsed with published_parsed
            updated=struct_time_to_datetime(dict.get(channel, "updated_parsed")),
            ttl=self._parse_ttl(channel.get("ttl")),
            items=[self.parse_item(entry) for entry in parsed.get("entries", [])],
        )

    def parse_item(self, raw_entry: dict) -> RemoteItem:
        """Parse one feedparser entry.

        Args:
            raw_entry: Raw entry from feedparser

        Returns:
            RemoteItem, with an empty GUID when the entry carries none
        """
        return RemoteItem(
            guid=(raw_entry.get("id") or "").strip(),
            title=self._normalize_title(raw_entry.get("title")),
            link=self._normalize_link(raw_entry.get("link")),
            description=(raw_entry.get("summary") or "").strip(),
            author=self._normalize_author(raw_entry.get("author")),
            updated=struct_time_to_datetime(dict.get(raw_entry, "updated_parsed")),
            published=struct_time_to_datetime(raw_entry.get("published_parsed")),
        )

    def _normalize_title(self, title: Optional[str]) -> str:
        """Unescape entities and collapse whitespace."""
        if not title:
            return ""

        title = unescape(str(title))
        title = re.sub(r"\s+", " ", title.strip())

        if len(title) > MAX_TITLE_LENGTH:
            title = title[: MAX_TITLE_LENGTH - 3] + "..."

        return title

    def _normalize_link(self, link: Optional[str]) -> str:
        if not link:
            return ""
        return str(link).strip()

    def _normalize_author(self, author: Optional[str]) -> str:
        """Normalize an author name, dropping "by"/"posted by" prefixes."""
        if not author:
            return ""

        # Some feeds give a detail dict instead of a string
        if isinstance(author, dict):
            author = author.get("name") or author.get("email") or ""

        author = unescape(str(author)).strip()
        author = re.sub(r"^(by|posted by)\s+", "", author, flags=re.IGNORECASE)

        if len(author) > MAX_AUTHOR_LENGTH:
            author = author[: MAX_AUTHOR_LENGTH - 3] + "..."

        return author

    def _normalize_description(self, description: Optional[str]) -> str:
        """Reduce a feed description to plain text."""
        if not description:
            return ""

        description = unescape(str(description))

        if "<" in description:
            soup = BeautifulSoup(description, "html.parser")
            description = soup.get_text()

        return description.strip()

    def _parse_ttl(self, ttl: Optional[str]) -> int:
        """Parse the RSS ``<ttl>`` hint (minutes); 0 when absent or invalid."""
        if not ttl:
            return 0

        try:
            return max(0, int(str(ttl).strip()))
        except ValueError:
            logger.debug(f"Ignoring invalid ttl: {ttl!r}")
            return 0

