import logging
from typing import Any, Awaitable, Callable, List, Optional

from blog_api.cache import ResponseCache, cache_key
from blog_api.errors import NotFoundError, ValidationError
from blog_api.repos.comments_repo import CommentsRepo
from blog_api.repos.posts_repo import PostsRepo
from blog_api.repos.terms_repo import CATEGORY, TAG
from blog_api.services.pagination import (
    Page,
    build_pagination,
    paginate,
    parse_positive_int,
)
from blog_api.services.shaping import (
    parse_term_list,
    shape_comment,
    shape_post,
    shape_post_from_concat,
    shape_term_rows,
)

logger = logging.getLogger(__name__)

RECENT_POSTS_LIMIT = 3
RELATED_POSTS_LIMIT = 2


class PostsService:
    def __init__(self, repo: PostsRepo, comments_repo: CommentsRepo, cache: ResponseCache):
        self.repo = repo
        self.comments_repo = comments_repo
        self.cache = cache

    async def list_posts(self, page: Any = None, limit: Any = None) -> dict:
        pg = paginate(page, limit)
        key = cache_key("posts", pg.page, pg.limit, pg.offset)
        return await self.cache.get_or_set(
            key,
            lambda: self._paginated(
                pg,
                lambda: self.repo.list_published(pg.limit, pg.offset),
                self.repo.count_published,
            ),
        )

    async def posts_by_author(self, author_id: Any, page: Any = None, limit: Any = None) -> dict:
        author = parse_positive_int(
            author_id, None, "Invalid pagination parameters or missing author ID"
        )
        if author is None:
            raise ValidationError("Invalid pagination parameters or missing author ID")
        pg = paginate(page, limit)
        key = cache_key("posts", "author", author, pg.page, pg.limit, pg.offset)
        return await self.cache.get_or_set(
            key,
            lambda: self._paginated(
                pg,
                lambda: self.repo.list_by_author(author, pg.limit, pg.offset),
                lambda: self.repo.count_by_author(author),
            ),
        )

    async def posts_by_category(self, category_slug: str, page: Any = None, limit: Any = None) -> dict:
        if not category_slug:
            raise ValidationError("Missing category slug")
        pg = paginate(page, limit)
        key = cache_key("posts", "category", category_slug, pg.page, pg.limit, pg.offset)
        return await self.cache.get_or_set(
            key,
            lambda: self._paginated(
                pg,
                lambda: self.repo.list_by_category(category_slug, pg.limit, pg.offset),
                lambda: self.repo.count_by_category(category_slug),
            ),
        )

    async def get_post(self, slug: str) -> dict:
        """Single post with its categories, tags, SEO record and approved comments."""
        if not slug:
            raise ValidationError("Missing slug parameter")

        key = cache_key("post", slug)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        row = await self.repo.get_by_slug(slug)
        if row is None:
            # Misses are not cached so a post published later shows up immediately
            raise NotFoundError("Post not found")

        post_id = row["ID"]
        categories = await self.repo.terms_for_post(post_id, CATEGORY)
        tags = await self.repo.terms_for_post(post_id, TAG)
        seo_rows = await self.repo.seo_for_posts([post_id])
        comments = await self.comments_repo.list_approved(post_id)

        response = {
            "post": shape_post(
                row, shape_term_rows(categories), shape_term_rows(tags), seo_rows
            ),
            "comments": [shape_comment(c) for c in comments],
        }
        self.cache.set(key, response)
        return response

    async def recent_posts(self) -> dict:
        key = cache_key("posts", "recent", RECENT_POSTS_LIMIT)

        async def load():
            rows = await self.repo.recent_with_terms(RECENT_POSTS_LIMIT)
            return _envelope({"posts": [shape_post_from_concat(r) for r in rows]})

        return await self.cache.get_or_set(key, load)

    async def related_posts(self, category_name: Optional[str]) -> dict:
        if not category_name:
            raise ValidationError("Category Name is required")

        key = cache_key("posts", "related", category_name)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        term_id = await self.repo.find_category_id(category_name)
        if term_id is None:
            raise NotFoundError("Category not found")

        rows = await self.repo.related_with_terms(term_id, RELATED_POSTS_LIMIT)
        response = _envelope({"posts": [shape_post_from_concat(r) for r in rows]})
        self.cache.set(key, response)
        return response

    async def _paginated(
        self,
        pg: Page,
        fetch_rows: Callable[[], Awaitable[List[dict]]],
        fetch_total: Callable[[], Awaitable[int]],
    ) -> dict:
        rows = await fetch_rows()
        total = await fetch_total()
        if not rows:
            return _envelope({"posts": [], "pagination": build_pagination(pg, total)})

        post_ids = [row["ID"] for row in rows]
        categories = await self.repo.terms_for_posts(post_ids, CATEGORY)
        tags = await self.repo.terms_for_posts(post_ids, TAG)
        seo_rows = await self.repo.seo_for_posts(post_ids)

        posts = [
            shape_post(
                row,
                parse_term_list(categories.get(row["ID"])),
                parse_term_list(tags.get(row["ID"])),
                seo_rows,
            )
            for row in rows
        ]
        logger.debug(f"Shaped {len(posts)} posts for page {pg.page}")
        return _envelope({"posts": posts, "pagination": build_pagination(pg, total)})


def _envelope(data: dict) -> dict:
    return {"success": True, "status": 200, "data": data}
