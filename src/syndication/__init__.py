"""
Syndication - self-hosted RSS/Atom feed aggregator.

This package provides the feed synchronization engine: conditional fetching,
change detection, GUID deduplication and scheduled fan-out across users.
"""

__version__ = "0.1.0"
