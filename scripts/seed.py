#!/usr/bin/env python3
"""Seed Redis with demo posts.

Creates posts through the repository, so every post gets its id, recency
index entry and link mapping exactly as a form submission would.

Not idempotent: rerunning creates new ids, and reused links take over the
link mapping (the older posts stay in the listing).

Usage:
    python -m scripts.seed
    python -m scripts.seed --count 3
"""

import argparse
import asyncio
import logging
import os
import sys

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

from blog.services.posts import PostRepository
from blog.settings import get_settings
from blog.stores.redis import StoreClient

load_dotenv()

logger = logging.getLogger("seed")

# ============================================================
# Demo posts (oldest first, so the last one lists on top)
# ============================================================

DEMO_POSTS = [
    {
        "title": "Hello, world",
        "link": "hello-world",
        "body": "First post. Everything here lives in a single Redis instance.",
    },
    {
        "title": "How posts are indexed",
        "link": "how-posts-are-indexed",
        "body": "Each post gets an id from INCR, a slot in a sorted set keyed by "
        "creation time and an entry in the link hash.",
    },
    {
        "title": "Links are not unique",
        "link": "links-are-not-unique",
        "body": "Creating a post with an existing link moves the link to the new post.",
    },
]


async def seed(count: int) -> None:
    settings = get_settings()
    store = StoreClient.from_url(
        settings.redis_url,
        max_connections=settings.redis_max_connections,
        socket_timeout=settings.redis_socket_timeout,
        socket_connect_timeout=settings.redis_socket_connect_timeout,
    )
    repo = PostRepository(store)
    try:
        for item in DEMO_POSTS[:count]:
            post = await repo.create(title=item["title"], link=item["link"], body=item["body"])
            logger.info(f"Seeded post {post.id}: /post/{post.link}")
    finally:
        await store.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed Redis with demo blog posts")
    parser.add_argument(
        "--count",
        type=int,
        default=len(DEMO_POSTS),
        help=f"Number of demo posts to create (max {len(DEMO_POSTS)})",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    asyncio.run(seed(max(0, args.count)))


if __name__ == "__main__":
    main()
