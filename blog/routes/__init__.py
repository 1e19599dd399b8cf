"""HTTP routes."""

from fastapi import APIRouter

from blog.routes import posts

api_router = APIRouter()

# Blog pages (list, view, create)
api_router.include_router(posts.router, tags=["posts"])
