from typing import Any

from blog_api.cache import ResponseCache, cache_key
from blog_api.repos.terms_repo import CATEGORY, TAG, TermsRepo
from blog_api.services.pagination import parse_positive_int
from blog_api.services.shaping import rank_terms


class TermsService:
    def __init__(self, repo: TermsRepo, cache: ResponseCache):
        self.repo = repo
        self.cache = cache

    async def list_categories(self, popular: Any = None) -> dict:
        top = parse_positive_int(
            popular, None, "Invalid query parameter for popular categories"
        )

        async def load():
            rows = await self.repo.list_with_counts(CATEGORY)
            return {"categories": rank_terms(rows, top)}

        key = cache_key("categories", "all" if top is None else top)
        return await self.cache.get_or_set(key, load)

    async def list_tags(self) -> dict:
        async def load():
            rows = await self.repo.list_with_counts(TAG)
            return {"tags": rank_terms(rows)}

        return await self.cache.get_or_set(cache_key("tags", "all"), load)
