"""FastAPI dependencies.

The StoreClient is created once in the app lifespan and kept on `app.state`;
handlers receive a PostRepository bound to it.
"""

from fastapi import Depends, Request

from blog.services.posts import PostRepository
from blog.stores.redis import StoreClient


def get_store(request: Request) -> StoreClient:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Redis store not initialized")
    return store


def get_repository(store: StoreClient = Depends(get_store)) -> PostRepository:
    return PostRepository(store)
