"""Blog pages.

GET  /               - list of all posts, most recent first
GET  /post/{link}    - a single post, or a not-found page
GET  /create         - create form
POST /create         - create a post, then 302 to its page

Routers are thin: the repository owns storage and indexing.
"""

from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse, RedirectResponse

from blog.dependencies import get_repository
from blog.errors import NotFound
from blog.routes import pages
from blog.services.posts import PostRepository

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def list_posts(repo: PostRepository = Depends(get_repository)) -> HTMLResponse:
    posts = await repo.list_recent()
    return HTMLResponse(pages.render_index(posts))


@router.get("/post/{link:path}", response_class=HTMLResponse)
async def show_post(link: str, repo: PostRepository = Depends(get_repository)) -> HTMLResponse:
    """Render a post by its link.

    Storage errors propagate to the app-level handler (500).
    """
    try:
        post = await repo.get_by_link(link)
    except NotFound:
        return HTMLResponse(pages.render_not_found(link), status_code=404)
    return HTMLResponse(pages.render_post(post))


@router.get("/create", response_class=HTMLResponse)
async def create_form() -> HTMLResponse:
    return HTMLResponse(pages.CREATE_FORM)


@router.post("/create")
async def create_post(
    title: str = Form(default=""),
    link: str = Form(default=""),
    body: str = Form(default=""),
    repo: PostRepository = Depends(get_repository),
) -> RedirectResponse:
    post = await repo.create(title=title, link=link, body=body)
    return RedirectResponse(url=pages.post_url(post.link), status_code=302)
