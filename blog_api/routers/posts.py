import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from blog_api import dependencies as deps
from blog_api.errors import BlogAPIError
from blog_api.schemas.blog import CommentCreate
from blog_api.services.comments_service import CommentsService
from blog_api.services.posts_service import PostsService
from blog_api.services.search_service import SearchService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Posts"])


@router.get("/posts")
async def list_posts(
    page: Optional[str] = Query(None, description="Page number, defaults to 1"),
    limit: Optional[str] = Query(None, description="Posts per page, defaults to 10"),
    service: PostsService = Depends(deps.get_posts_service),
):
    """Published posts, newest first, with categories, tags and SEO metadata."""
    try:
        return await service.list_posts(page, limit)
    except (HTTPException, BlogAPIError):
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/recent")
async def recent_posts(service: PostsService = Depends(deps.get_posts_service)):
    """The three most recent posts."""
    try:
        return await service.recent_posts()
    except (HTTPException, BlogAPIError):
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing recent posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/related")
async def related_posts(
    categoryName: Optional[str] = Query(None),
    service: PostsService = Depends(deps.get_posts_service),
):
    """The two most recent posts in the named category."""
    try:
        return await service.related_posts(categoryName)
    except (HTTPException, BlogAPIError):
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts related to {categoryName}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/search")
async def search_posts(
    query: Optional[str] = Query(None),
    service: SearchService = Depends(deps.get_search_service),
):
    try:
        return await service.search(query)
    except (HTTPException, BlogAPIError):
        raise
    except Exception as e:
        logger.error(f"Unexpected error searching posts for {query}: {e}")
        raise HTTPException(status_code=500, detail="Failed to search posts")


@router.get("/posts/author/{author_id}")
async def posts_by_author(
    author_id: str,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        return await service.posts_by_author(author_id, page, limit)
    except (HTTPException, BlogAPIError):
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts for author {author_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/category/{category_slug}")
async def posts_by_category(
    category_slug: str,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        return await service.posts_by_category(category_slug, page, limit)
    except (HTTPException, BlogAPIError):
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts for category {category_slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.post("/posts/comments")
async def submit_comment(
    body: Optional[CommentCreate] = None,
    service: CommentsService = Depends(deps.get_comments_service),
):
    """Store a comment as approved. Cached post responses are left untouched."""
    try:
        return await service.submit(body or CommentCreate())
    except (HTTPException, BlogAPIError):
        raise
    except Exception as e:
        logger.error(f"Unexpected error submitting comment: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/posts/{slug}")
async def get_post(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a single post by slug."""
    try:
        return await service.get_post(slug)
    except (HTTPException, BlogAPIError):
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")
