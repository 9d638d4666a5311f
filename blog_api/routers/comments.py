import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from blog_api import dependencies as deps
from blog_api.errors import BlogAPIError
from blog_api.services.comments_service import CommentsService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Comments"])


@router.get("/comments")
async def list_comments(
    postId: Optional[str] = Query(None),
    service: CommentsService = Depends(deps.get_comments_service),
):
    """Approved comments for a post, oldest first. Not cached."""
    try:
        return await service.list_for_post(postId)
    except (HTTPException, BlogAPIError):
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing comments for post {postId}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve comments")
