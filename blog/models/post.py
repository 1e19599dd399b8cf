"""Post record stored in Redis."""

from datetime import datetime, timezone

from pydantic import BaseModel

NANOS_PER_SECOND = 1_000_000_000


class Post(BaseModel):
    """A blog post.

    `created_at_ns` is nanoseconds since the Unix epoch and is the score
    of the post in the recency index. All defaults together form the
    zero-value post used as a placeholder when a listed document is missing.
    """

    id: int = 0
    link: str = ""
    title: str = ""
    body: str = ""
    created_at_ns: int = 0

    model_config = {"frozen": True}

    @property
    def created_at(self) -> datetime:
        """Creation time as an aware UTC datetime (microsecond precision)."""
        seconds, nanos = divmod(self.created_at_ns, NANOS_PER_SECOND)
        return datetime.fromtimestamp(seconds, tz=timezone.utc).replace(
            microsecond=nanos // 1000
        )

    def is_zero(self) -> bool:
        return self == Post()
