"""Record codec for Post documents.

Posts are stored as self-describing UTF-8 JSON objects carrying all fields,
so a document can be decoded without any external schema version.
"""

from pydantic import ValidationError

from blog.errors import DecodeError
from blog.models import Post


def encode(post: Post) -> bytes:
    """Serialize a post to the bytes stored in the `post` hash."""
    return post.model_dump_json().encode("utf-8")


def decode(data: bytes | None) -> Post:
    """Parse stored bytes back into a Post.

    Raises:
        DecodeError: If the payload is missing, truncated, not UTF-8 or does
            not match the Post schema.
    """
    if not data:
        raise DecodeError("empty post payload")
    try:
        return Post.model_validate_json(data, strict=True)
    except (ValidationError, UnicodeDecodeError) as e:
        raise DecodeError(f"malformed post payload: {e}") from e
