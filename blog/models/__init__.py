"""Domain models.

Models represent records persisted in Redis:
- posts: JSON documents in the `post` hash, indexed by recency and link
"""

from blog.models.post import Post

__all__ = ["Post"]
