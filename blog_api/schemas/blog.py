from typing import Any, Optional

from pydantic import BaseModel, Field


class TermRef(BaseModel):
    name: str
    slug: Optional[str] = None


class SocialHandles(BaseModel):
    facebook: str = ""
    instagram: str = ""
    linkedin: str = ""
    tumblr: str = ""
    twitter: str = ""
    youtube: str = ""
    wikipedia: str = ""
    pinterest: str = ""


class Author(BaseModel):
    id: int
    displayName: str = ""
    description: str = ""
    website: str = ""
    socialHandles: SocialHandles = Field(default_factory=SocialHandles)
    profileImage: str


class Term(BaseModel):
    id: int
    name: str
    slug: str
    post_count: int = 0


class CommentCreate(BaseModel):
    """
    Comment submission body. Fields are left untyped so that a missing or
    wrongly typed value reaches the service and becomes a 400, not a 422.
    """

    name: Optional[Any] = None
    email: Optional[Any] = None
    website: Optional[Any] = None
    comment: Optional[Any] = None
    postId: Optional[Any] = None
