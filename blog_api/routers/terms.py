import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from blog_api import dependencies as deps
from blog_api.errors import BlogAPIError
from blog_api.services.terms_service import TermsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/categories", tags=["Categories"])
async def list_categories(
    popular: Optional[str] = Query(
        None, description="Limit to the top N categories by published post count"
    ),
    service: TermsService = Depends(deps.get_terms_service),
):
    try:
        return await service.list_categories(popular)
    except (HTTPException, BlogAPIError):
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing categories: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve categories")


@router.get("/tags", tags=["Tags"])
async def list_tags(service: TermsService = Depends(deps.get_terms_service)):
    try:
        return await service.list_tags()
    except (HTTPException, BlogAPIError):
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing tags: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve tags")
