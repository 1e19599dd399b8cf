"""Tests for the post repository and its Redis index scheme."""

import asyncio

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from blog.errors import DecodeError, NotFound, StorageError, TransactionError
from blog.models import Post
from blog.services.codec import encode
from blog.services.posts import PostRepository
from blog.stores.redis import HashSet, StoreClient


@pytest.mark.asyncio
async def test_create_writes_document_and_indexes(repo: PostRepository, redis_client, base_ns: int):
    post = await repo.create(title="T", link="abc", body="B")

    assert post == Post(id=1, link="abc", title="T", body="B", created_at_ns=base_ns)
    assert await redis_client.get("id:post") == b"1"
    assert await redis_client.hget("post", "1") == encode(post)
    assert await redis_client.zrevrange("post:created_at", 0, -1, withscores=True) == [
        (b"1", float(base_ns))
    ]
    assert await redis_client.hget("link", "abc") == b"1"


@pytest.mark.asyncio
async def test_create_then_fetch_by_link(repo: PostRepository):
    created = await repo.create(title="T", link="abc", body="B")

    fetched = await repo.get_by_link("abc")
    assert fetched.id == created.id
    assert fetched.title == "T"
    assert fetched.body == "B"
    assert fetched == created


@pytest.mark.asyncio
async def test_create_then_fetch_by_id(repo: PostRepository):
    created = await repo.create(title="T", link="abc", body="B")
    assert await repo.get_by_id(created.id) == created
    with pytest.raises(NotFound):
        await repo.get_by_id(created.id + 1)


@pytest.mark.asyncio
async def test_ids_strictly_increase(repo: PostRepository):
    ids = [(await repo.create(title=f"t{i}", link=f"l{i}", body="")).id for i in range(5)]
    assert ids == [1, 2, 3, 4, 5]


@pytest.mark.asyncio
async def test_concurrent_creates_get_distinct_ids(store: StoreClient):
    repo = PostRepository(store)
    posts = await asyncio.gather(
        *(repo.create(title=f"t{i}", link=f"l{i}", body="") for i in range(20))
    )
    assert sorted(p.id for p in posts) == list(range(1, 21))


@pytest.mark.asyncio
async def test_list_recent_most_recent_first(repo: PostRepository):
    p1 = await repo.create(title="one", link="one", body="")
    p2 = await repo.create(title="two", link="two", body="")
    p3 = await repo.create(title="three", link="three", body="")

    assert await repo.list_recent() == [p3, p2, p1]


@pytest.mark.asyncio
async def test_list_recent_empty_store(repo: PostRepository):
    assert await repo.list_recent() == []


@pytest.mark.asyncio
async def test_get_by_link_unknown_is_not_found(repo: PostRepository):
    with pytest.raises(NotFound) as exc_info:
        await repo.get_by_link("nonexistent")
    assert not isinstance(exc_info.value, StorageError)


@pytest.mark.asyncio
async def test_link_collision_last_write_wins(repo: PostRepository):
    first = await repo.create(title="first", link="same", body="")
    second = await repo.create(title="second", link="same", body="")

    resolved = await repo.get_by_link("same")
    assert resolved.id == second.id
    assert resolved.title == "second"

    listed_ids = [p.id for p in await repo.list_recent()]
    assert first.id in listed_ids
    assert listed_ids == [second.id, first.id]


@pytest.mark.asyncio
async def test_get_by_link_missing_document_is_storage_error(repo: PostRepository, redis_client):
    await redis_client.hset("link", "orphan", 42)
    with pytest.raises(StorageError):
        await repo.get_by_link("orphan")


@pytest.mark.asyncio
async def test_get_by_link_invalid_id_is_storage_error(repo: PostRepository, redis_client):
    await redis_client.hset("link", "bad", "abc")
    with pytest.raises(StorageError):
        await repo.get_by_link("bad")


@pytest.mark.asyncio
async def test_get_by_link_corrupt_document_is_decode_error(repo: PostRepository, redis_client):
    await redis_client.hset("link", "corrupt", 1)
    await redis_client.hset("post", 1, b"{garbage")
    with pytest.raises(DecodeError):
        await repo.get_by_link("corrupt")


@pytest.mark.asyncio
async def test_list_recent_missing_document_yields_zero_post(
    repo: PostRepository, redis_client, base_ns: int
):
    p1 = await repo.create(title="one", link="one", body="")
    # Newest entry in the index with no document behind it.
    await redis_client.zadd("post:created_at", {"99": float(base_ns + 10**12)})
    await redis_client.hset("post", 98, b"corrupt")
    await redis_client.zadd("post:created_at", {"98": float(base_ns + 10**11)})

    posts = await repo.list_recent()
    assert posts == [Post(), Post(), p1]
    assert posts[0].is_zero()


@pytest.mark.asyncio
async def test_failed_increment_writes_nothing(repo: PostRepository, redis_client):
    await redis_client.set("id:post", "not-a-number")

    with pytest.raises(StorageError):
        await repo.create(title="T", link="abc", body="B")

    assert await redis_client.hlen("post") == 0
    assert await redis_client.zcard("post:created_at") == 0
    assert await redis_client.hlen("link") == 0


@pytest.mark.asyncio
async def test_failed_transaction_consumes_id(repo: PostRepository, monkeypatch: pytest.MonkeyPatch):
    def broken_queue(self, pipe):
        raise RedisConnectionError("connection lost")

    with monkeypatch.context() as m:
        m.setattr(HashSet, "queue", broken_queue)
        with pytest.raises(TransactionError):
            await repo.create(title="lost", link="lost", body="")

    with pytest.raises(NotFound):
        await repo.get_by_link("lost")

    post = await repo.create(title="kept", link="kept", body="")
    assert post.id == 2
    assert await repo.list_recent() == [post]
