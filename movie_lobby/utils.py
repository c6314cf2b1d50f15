"""
Document helpers shared by the store.
"""

from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId


def parse_object_id(value: str) -> Optional[ObjectId]:
    """Parse a 24-hex string into an ObjectId, or None if it is not one."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None
