import logging
from typing import Dict, List, Optional

from rapidfuzz import fuzz, process, utils

from blog_api.cache import ResponseCache, cache_key
from blog_api.errors import ValidationError
from blog_api.repos.posts_repo import PostsRepo

logger = logging.getLogger(__name__)

SEARCH_KEYS = ("post_title", "post_excerpt")
# A post matches only when its distance (0 = exact, 1 = unrelated) is strictly below this
SEARCH_THRESHOLD = 0.4


def fuzzy_match(
    query: str, items: List[dict], threshold: float = SEARCH_THRESHOLD
) -> List[dict]:
    """
    Typo-tolerant match of ``query`` against the title and excerpt of every
    item. Each item's best key score becomes a distance; matches are returned
    by ascending distance, keeping the input order for ties.
    """
    score_cutoff = round((1 - threshold) * 100, 6)
    best: Dict[int, float] = {}

    for search_key in SEARCH_KEYS:
        choices = {i: item.get(search_key) for i, item in enumerate(items)}
        matches = process.extract(
            query,
            choices,
            scorer=fuzz.partial_ratio,
            processor=utils.default_process,
            score_cutoff=score_cutoff,
            limit=None,
        )
        for _choice, score, index in matches:
            # score_cutoff is inclusive in rapidfuzz; the boundary itself is not a match
            if score <= score_cutoff:
                continue
            if score > best.get(index, -1):
                best[index] = score

    ranked = sorted(best, key=lambda index: (1 - best[index] / 100, index))
    return [items[index] for index in ranked]


class SearchService:
    def __init__(self, repo: PostsRepo, cache: ResponseCache):
        self.repo = repo
        self.cache = cache

    async def search(self, query: Optional[str]) -> dict:
        if not query or not query.strip():
            raise ValidationError("Query parameter is required")

        async def load():
            corpus = await self.repo.search_corpus()
            results = fuzzy_match(query, corpus)
            logger.debug(f"Search '{query}' matched {len(results)} of {len(corpus)} posts")
            return {"results": results}

        return await self.cache.get_or_set(cache_key("search", query), load)
