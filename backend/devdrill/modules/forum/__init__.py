"""
Forum Module - Community discussions.

Features:
- Discussion groups, discussions, threads and replies
- Reply counts and author summaries computed at read time
- Bounded up/down votes on threads and replies
"""

from devdrill.modules.forum.exceptions import ForumError, NotFoundError
from devdrill.modules.forum.service import ForumService

__all__ = ["ForumService", "ForumError", "NotFoundError"]
