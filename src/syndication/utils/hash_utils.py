"""
Hash helpers used for entry deduplication.
"""

import hashlib
from typing import Optional


def compute_md5_hash(content: Optional[str]) -> Optional[str]:
    """Compute the MD5 hex digest of a string.

    Unlike title normalization elsewhere, the input is hashed verbatim so
    that distinct items never collapse onto the same digest.

    Args:
        content: Text to hash

    Returns:
        32 character hex digest, or None for None input
    """
    if content is None:
        return None
    return hashlib.md5(content.encode("utf-8")).hexdigest()


def compute_item_guid(title: Optional[str], link: Optional[str]) -> str:
    """Synthesize a stable GUID for a feed item that has none.

    The GUID is the MD5 digest of title followed by link, so two fetches of
    the same logical item always produce the same value.

    Args:
        title: Item title
        link: Item link

    Returns:
        32 character hex digest
    """
    return compute_md5_hash((title or "") + (link or ""))
