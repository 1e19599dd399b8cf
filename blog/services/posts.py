"""Post repository: documents plus secondary indexes in Redis.

Create flow:
1. INCR id:post to allocate an id (irreversible, gaps are tolerated)
2. Stamp creation time in nanoseconds
3. One MULTI/EXEC: document, recency index entry, link mapping

Consistency notes:
- If the transaction fails the allocated id is never reused.
- Links are not checked for uniqueness; a later create with the same link
  takes over the link mapping (last write wins). The earlier post stays
  reachable through the recency listing only.
"""

from collections.abc import Callable
import logging
import time

from blog.errors import DecodeError, NotFound, StorageError
from blog.models import Post
from blog.services.codec import decode, encode
from blog.stores.redis import (
    KEY_LINKS,
    KEY_POST_ID,
    KEY_POSTS,
    KEY_POSTS_BY_CREATED_AT,
    HashSet,
    SortedSetAdd,
    StoreClient,
)

logger = logging.getLogger("uvicorn.error")


class PostRepository:
    """Creates and reads posts through an injected StoreClient."""

    def __init__(self, store: StoreClient, *, clock: Callable[[], int] = time.time_ns) -> None:
        self._store = store
        self._clock = clock

    async def create(self, title: str, link: str, body: str) -> Post:
        """Allocate an id and write the post with all of its index entries.

        Raises:
            StorageError: If id allocation fails (nothing is written).
            TransactionError: If the index writes fail (the id is consumed).
        """
        post_id = await self._store.increment(KEY_POST_ID)
        post = Post(
            id=post_id,
            link=link,
            title=title,
            body=body,
            created_at_ns=self._clock(),
        )
        await self._store.transaction(
            HashSet(KEY_POSTS, post.id, encode(post)),
            SortedSetAdd(KEY_POSTS_BY_CREATED_AT, post.created_at_ns, post.id),
            HashSet(KEY_LINKS, post.link, post.id),
        )
        logger.info(f"Post created: id={post.id} link={post.link!r}")
        return post

    async def get_by_id(self, post_id: int) -> Post:
        """Fetch a post by primary key.

        Raises:
            NotFound: If no document exists for the id.
            DecodeError: If the stored document is corrupt.
        """
        data = await self._store.hash_get(KEY_POSTS, post_id)
        if data is None:
            raise NotFound(f"post {post_id}")
        return decode(data)

    async def get_by_link(self, link: str) -> Post:
        """Resolve a link to its post.

        Raises:
            NotFound: If the link has no mapping.
            StorageError: If the mapped document is missing or corrupt.
        """
        raw_id = await self._store.hash_get(KEY_LINKS, link)
        if raw_id is None:
            raise NotFound(f"link {link}")
        post_id = _parse_id(raw_id)

        data = await self._store.hash_get(KEY_POSTS, post_id)
        if data is None:
            # Indexed but no document: the indexes diverged from the documents.
            raise StorageError(f"link {link!r} maps to missing post {post_id}")
        return decode(data)

    async def list_recent(self) -> list[Post]:
        """All posts, most recent first.

        One index read followed by a single pipelined batch of document reads.
        A missing or corrupt document becomes a zero-value Post in its slot.
        """
        ids = await self._store.sorted_set_range_desc(KEY_POSTS_BY_CREATED_AT)
        if not ids:
            return []

        documents = await self._store.hash_get_many(KEY_POSTS, ids)
        posts: list[Post] = []
        for raw_id, data in zip(ids, documents):
            try:
                posts.append(decode(data))
            except DecodeError as e:
                logger.warning(f"Post {raw_id!r} listed in recency index but unreadable: {e}")
                posts.append(Post())
        return posts


def _parse_id(raw: bytes) -> int:
    try:
        return int(raw)
    except ValueError as e:
        raise StorageError(f"invalid post id in link map: {raw!r}") from e
