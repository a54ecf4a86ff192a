from fastapi import APIRouter, HTTPException, Depends, status
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date
import logging

from zeo_api.core.json_store import JsonStore, get_store
from zeo_api.auth.middleware import get_current_admin, CurrentAdmin
from zeo_api.services import catalog
from zeo_api.services.catalog import slugify

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["posts"])


class PostCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = None
    excerpt: Optional[str] = ""
    content: Optional[str] = ""
    category: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None
    featured: bool = False

    class Config:
        extra = "allow"


class PostUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = None
    featured: Optional[bool] = None

    class Config:
        extra = "allow"


@router.get("/posts")
async def get_posts(
    category: Optional[str] = None,
    featured: Optional[bool] = None,
    limit: Optional[int] = None,
    store: JsonStore = Depends(get_store)
):
    """Get blog posts, optionally filtered by category or featured flag."""
    posts = catalog.equals_ignore_case(store["posts"].all(), "category", category)
    if featured is not None:
        posts = [post for post in posts if post.get("featured") == featured]
    return catalog.apply_limit(posts, limit)


@router.get("/posts/{identifier}")
async def get_post(identifier: str, store: JsonStore = Depends(get_store)):
    return catalog.resolve_or_404(store["posts"], identifier, "Post")


@router.get("/admin/posts")
async def get_admin_posts(
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    return store["posts"].all()


@router.get("/admin/posts/{post_id}")
async def get_admin_post(
    post_id: int,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    return catalog.get_or_404(store["posts"], post_id, "Post")


@router.post("/admin/posts", status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    """Create a blog post, deriving slug and date when omitted."""
    data = post_data.model_dump()
    data["slug"] = data.get("slug") or slugify(data["title"])
    data["date"] = data.get("date") or date.today().isoformat()
    data["author"] = data.get("author") or current_admin.name

    if store["posts"].get_by_slug(data["slug"]):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A post with this slug already exists"
        )

    post = store["posts"].insert(data)
    logger.info(f"Post {post['id']} created by {current_admin.email}")
    return post


@router.put("/admin/posts/{post_id}")
async def update_post(
    post_id: int,
    post_data: PostUpdate,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    catalog.get_or_404(store["posts"], post_id, "Post")
    return store["posts"].replace(post_id, post_data.model_dump(exclude_unset=True))


@router.delete("/admin/posts/{post_id}")
async def delete_post(
    post_id: int,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    catalog.get_or_404(store["posts"], post_id, "Post")
    store["posts"].remove(post_id)

    logger.info(f"Post {post_id} deleted by {current_admin.email}")
    return {"message": "Post deleted successfully"}
