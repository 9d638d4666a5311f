from typing import Any

from blog_api.cache import ResponseCache, cache_key
from blog_api.errors import ValidationError
from blog_api.repos.authors_repo import AuthorsRepo
from blog_api.services.pagination import parse_positive_int
from blog_api.services.shaping import shape_author


class AuthorsService:
    def __init__(self, repo: AuthorsRepo, cache: ResponseCache):
        self.repo = repo
        self.cache = cache

    async def list_authors(self) -> dict:
        async def load():
            rows = await self.repo.list_authors()
            return {"authors": [shape_author(row) for row in rows]}

        return await self.cache.get_or_set(cache_key("authors", "all"), load)

    async def get_author(self, author_id: Any) -> dict:
        """Same envelope as the listing, holding zero or one author."""
        author = parse_positive_int(author_id, None, "Invalid author ID")
        if author is None:
            raise ValidationError("Invalid author ID")

        async def load():
            rows = await self.repo.list_authors(author)
            return {"authors": [shape_author(row) for row in rows]}

        return await self.cache.get_or_set(cache_key("authors", author), load)
