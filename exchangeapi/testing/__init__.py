"""Test category markers and tag-based test selection."""

from exchangeapi.testing.selection import TagSelector, load_tag_selection
from exchangeapi.testing.tags import TAG_ROLE, TEST_TAGS, AdminStatusTest, collect_tags

__all__ = [
    "TAG_ROLE",
    "TEST_TAGS",
    "AdminStatusTest",
    "TagSelector",
    "collect_tags",
    "load_tag_selection",
]
