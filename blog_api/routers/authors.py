import logging

from fastapi import APIRouter, Depends, HTTPException

from blog_api import dependencies as deps
from blog_api.errors import BlogAPIError
from blog_api.services.authors_service import AuthorsService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authors"])


@router.get("/authors")
async def list_authors(service: AuthorsService = Depends(deps.get_authors_service)):
    try:
        return await service.list_authors()
    except (HTTPException, BlogAPIError):
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing authors: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve authors")


@router.get("/authors/{author_id}")
async def get_author(
    author_id: str,
    service: AuthorsService = Depends(deps.get_authors_service),
):
    try:
        return await service.get_author(author_id)
    except (HTTPException, BlogAPIError):
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving author {author_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve author")
