import logging
from typing import Any, Optional

from blog_api.errors import ValidationError
from blog_api.repos.comments_repo import CommentsRepo
from blog_api.schemas.blog import CommentCreate
from blog_api.services.pagination import parse_positive_int
from blog_api.services.shaping import shape_comment

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Name, email, comment, and post ID are required"


def escape_quotes(value: Optional[str]) -> str:
    return value.replace("'", "''") if value else ""


class CommentsService:
    """
    Comment submission and listing.

    Submissions are stored already approved and never touch the response
    cache: a cached ``post:<slug>`` entry keeps serving the old comment list
    until it expires.
    """

    def __init__(self, repo: CommentsRepo):
        self.repo = repo

    async def submit(self, payload: CommentCreate) -> dict:
        text_fields = (payload.name, payload.email, payload.comment)
        if not all(isinstance(v, str) and _present(v) for v in text_fields):
            raise ValidationError(MISSING_FIELDS)
        if not _present(payload.postId):
            raise ValidationError(MISSING_FIELDS)
        if payload.website is not None and not isinstance(payload.website, str):
            raise ValidationError("Invalid website")
        post_id = parse_positive_int(payload.postId, None, "Invalid post ID")

        await self.repo.insert_approved(
            post_id=post_id,
            name=escape_quotes(payload.name),
            email=escape_quotes(payload.email),
            website=escape_quotes(payload.website),
            content=escape_quotes(payload.comment),
        )
        logger.info(f"Comment submitted for post {post_id}")
        return {"message": "Comment submitted successfully"}

    async def list_for_post(self, post_id: Any) -> dict:
        if not _present(post_id):
            raise ValidationError("Bad Request: postId is required")
        parsed = parse_positive_int(post_id, None, "Invalid post ID")
        rows = await self.repo.list_approved(parsed)
        return {"comments": [shape_comment(row) for row in rows]}


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True
