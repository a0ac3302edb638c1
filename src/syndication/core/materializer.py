"""
Maps remote feed items to Entry rows.
"""

from syndication.core.parser import RemoteItem
from syndication.models import EntryModel, FeedModel, Marker


def materialize_entry(feed: FeedModel, item: RemoteItem) -> EntryModel:
    """Build an unsaved, unread Entry for a feed from a remote item.

    The item must already carry its final GUID.

    Args:
        feed: Owning feed
        item: Parsed remote item

    Returns:
        Transient EntryModel instance
    """
    return EntryModel(
        user_id=feed.user_id,
        feed_id=feed.id,
        guid=item.guid,
        title=item.title,
        link=item.link,
        description=item.description,
        author=item.author or "",
        mark=Marker.UNREAD.value,
        published_at=item.published or item.updated,
    )
