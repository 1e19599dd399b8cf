"""HTML rendering for the blog pages.

All user-supplied text is escaped before it is placed in markup.
"""

from html import escape
from urllib.parse import quote

from blog.models import Post


def post_url(link: str) -> str:
    return "/post/" + quote(link, safe="/")


def render_index(posts: list[Post]) -> str:
    items = "\n".join(
        f'    <li><a href="{escape(post_url(p.link))}">{escape(p.title)}</a></li>' for p in posts
    )
    return (
        f"<h1>Post list ({len(posts)})</h1>\n"
        '<a href="/create">Create new post</a><br>\n'
        "<ul>\n"
        f"{items}\n"
        "</ul>\n"
    )


def render_post(post: Post) -> str:
    return f"<h1>{escape(post.title)}</h1>\n<div>{escape(post.body)}</div>\n"


def render_not_found(link: str) -> str:
    return f"<p>post {escape(link)} not found D:</p>\n"


CREATE_FORM = """\
<h2>Create new Post</h2>
<form method="post" action="/create">
    <label>Title</label>
    <input name="title">
    <br>
    <label>Link</label>
    <input name="link">
    <br>
    <label>Body</label>
    <textarea name="body"></textarea>
    <br>
    <button type="submit">Create</button>
</form>
"""
