"""
Blog post endpoints. Updating a post always refreshes ``updatedAt``.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from portfolio.api.deps import get_repository, parse_id, require_admin
from portfolio.db import schemas
from portfolio.db.repositories.base import ContentRepository

router = APIRouter(prefix="/api/blog-posts", tags=["blog posts"])


@router.get("", response_model=List[schemas.BlogPost])
def list_blog_posts(repo: ContentRepository = Depends(get_repository)):
    return repo.list_blog_posts()


@router.get("/{post_id}", response_model=schemas.BlogPost)
def get_blog_post(post_id: str, repo: ContentRepository = Depends(get_repository)):
    post = repo.get_blog_post(parse_id(post_id, "blog post"))
    if post is None:
        raise HTTPException(status_code=404, detail="Blog post not found")
    return post


@router.post("", response_model=schemas.BlogPost, status_code=status.HTTP_201_CREATED)
def create_blog_post(
    post: schemas.BlogPostCreate,
    repo: ContentRepository = Depends(get_repository),
    _admin: schemas.User = Depends(require_admin),
):
    return repo.create_blog_post(post)


@router.put("/{post_id}", response_model=schemas.BlogPost)
def update_blog_post(
    post_id: str,
    payload: schemas.BlogPostUpdate,
    repo: ContentRepository = Depends(get_repository),
    _admin: schemas.User = Depends(require_admin),
):
    updated = repo.update_blog_post(parse_id(post_id, "blog post"), payload.changes())
    if updated is None:
        raise HTTPException(status_code=404, detail="Blog post not found")
    return updated


@router.delete("/{post_id}")
def delete_blog_post(
    post_id: str,
    repo: ContentRepository = Depends(get_repository),
    _admin: schemas.User = Depends(require_admin),
):
    if not repo.delete_blog_post(parse_id(post_id, "blog post")):
        raise HTTPException(status_code=404, detail="Blog post not found")
    return {"message": "Blog post deleted successfully"}
