from typing import Dict, List, Optional, Sequence

from blog_api.db.mysql import Database
from blog_api.services.shaping import TERM_SEPARATOR

POST_COLUMNS = """
    p.ID, p.post_author, p.post_date, p.post_modified, p.post_content, p.post_title,
    p.post_excerpt, p.post_status, p.comment_status, p.ping_status, p.post_name,
    p.comment_count,
    t.guid AS thumbnail_url,
    u.display_name AS author_name
"""

POST_JOINS = """
    FROM wp_posts p
    LEFT JOIN wp_postmeta pm ON p.ID = pm.post_id AND pm.meta_key = '_thumbnail_id'
    LEFT JOIN wp_posts t ON pm.meta_value = t.ID AND t.post_type = 'attachment'
    LEFT JOIN wp_users u ON p.post_author = u.ID
"""

PUBLISHED = "p.post_type = 'post' AND p.post_status = 'publish'"

IN_CATEGORY = """
    EXISTS (
        SELECT 1
        FROM wp_term_relationships tr
        JOIN wp_term_taxonomy tt ON tr.term_taxonomy_id = tt.term_taxonomy_id
        JOIN wp_terms cat_terms ON tt.term_id = cat_terms.term_id
        WHERE tr.object_id = p.ID AND tt.taxonomy = 'category' AND {condition}
    )
"""

TERMS_FOR_POSTS = f"""
    SELECT tr.object_id AS ID,
           GROUP_CONCAT(DISTINCT CONCAT(terms.name, ':', terms.slug)
                        ORDER BY terms.name SEPARATOR '{TERM_SEPARATOR}') AS terms
    FROM wp_term_relationships tr
    JOIN wp_term_taxonomy tt ON tr.term_taxonomy_id = tt.term_taxonomy_id
    JOIN wp_terms terms ON tt.term_id = terms.term_id
    WHERE tr.object_id IN :ids AND tt.taxonomy = :taxonomy
    GROUP BY tr.object_id
"""

TERMS_FOR_POST = """
    SELECT terms.name AS name, terms.slug AS slug
    FROM wp_term_relationships tr
    JOIN wp_term_taxonomy tt ON tr.term_taxonomy_id = tt.term_taxonomy_id AND tt.taxonomy = :taxonomy
    JOIN wp_terms terms ON tt.term_id = terms.term_id
    WHERE tr.object_id = :post_id
"""

SEO_FOR_POSTS = """
    SELECT id, object_id, permalink, title, description, breadcrumb_title, is_public,
           canonical, primary_focus_keyword, is_robots_noindex, is_robots_nofollow,
           is_robots_noarchive, is_robots_noimageindex, is_robots_nosnippet,
           twitter_title, twitter_image, twitter_description, open_graph_title,
           open_graph_description, open_graph_image, open_graph_image_meta,
           schema_article_type, schema_page_type
    FROM wp_yoast_indexable
    WHERE object_id IN :ids AND object_type = 'post' AND post_status = 'publish'
"""

# Posts with their category and tag lists folded into "name:slug" strings
POSTS_WITH_TERMS = f"""
    SELECT {POST_COLUMNS},
           (SELECT GROUP_CONCAT(DISTINCT CONCAT(ct.name, ':', ct.slug)
                                ORDER BY ct.name SEPARATOR '{TERM_SEPARATOR}')
            FROM wp_term_relationships ctr
            JOIN wp_term_taxonomy ctt ON ctr.term_taxonomy_id = ctt.term_taxonomy_id
            JOIN wp_terms ct ON ctt.term_id = ct.term_id
            WHERE ctr.object_id = p.ID AND ctt.taxonomy = 'category') AS categories,
           (SELECT GROUP_CONCAT(DISTINCT CONCAT(gt.name, ':', gt.slug)
                                ORDER BY gt.name SEPARATOR '{TERM_SEPARATOR}')
            FROM wp_term_relationships gtr
            JOIN wp_term_taxonomy gtt ON gtr.term_taxonomy_id = gtt.term_taxonomy_id
            JOIN wp_terms gt ON gtt.term_id = gt.term_id
            WHERE gtr.object_id = p.ID AND gtt.taxonomy = 'post_tag') AS tags
    {POST_JOINS}
"""


class PostsRepo:
    """Parameterized reads against wp_posts and its term/meta joins."""

    def __init__(self, db: Database):
        self.db = db

    async def list_published(self, limit: int, offset: int) -> List[dict]:
        return await self.db.query(
            f"""
            SELECT {POST_COLUMNS} {POST_JOINS}
            WHERE {PUBLISHED}
            ORDER BY p.post_date DESC, p.ID DESC
            LIMIT :limit OFFSET :offset
            """,
            {"limit": limit, "offset": offset},
        )

    async def count_published(self) -> int:
        rows = await self.db.query(
            f"SELECT COUNT(*) AS total FROM wp_posts p WHERE {PUBLISHED}"
        )
        return _total(rows)

    async def list_by_author(self, author_id: int, limit: int, offset: int) -> List[dict]:
        return await self.db.query(
            f"""
            SELECT {POST_COLUMNS} {POST_JOINS}
            WHERE {PUBLISHED} AND p.post_author = :author_id
            ORDER BY p.post_date DESC, p.ID DESC
            LIMIT :limit OFFSET :offset
            """,
            {"author_id": author_id, "limit": limit, "offset": offset},
        )

    async def count_by_author(self, author_id: int) -> int:
        rows = await self.db.query(
            f"""
            SELECT COUNT(*) AS total FROM wp_posts p
            WHERE {PUBLISHED} AND p.post_author = :author_id
            """,
            {"author_id": author_id},
        )
        return _total(rows)

    async def list_by_category(self, category_slug: str, limit: int, offset: int) -> List[dict]:
        in_category = IN_CATEGORY.format(condition="cat_terms.slug = :category_slug")
        return await self.db.query(
            f"""
            SELECT {POST_COLUMNS} {POST_JOINS}
            WHERE {PUBLISHED} AND {in_category}
            ORDER BY p.post_date DESC, p.ID DESC
            LIMIT :limit OFFSET :offset
            """,
            {"category_slug": category_slug, "limit": limit, "offset": offset},
        )

    async def count_by_category(self, category_slug: str) -> int:
        in_category = IN_CATEGORY.format(condition="cat_terms.slug = :category_slug")
        rows = await self.db.query(
            f"SELECT COUNT(*) AS total FROM wp_posts p WHERE {PUBLISHED} AND {in_category}",
            {"category_slug": category_slug},
        )
        return _total(rows)

    async def get_by_slug(self, slug: str) -> Optional[dict]:
        rows = await self.db.query(
            f"""
            SELECT {POST_COLUMNS}, p.post_type, pm.meta_value AS thumbnail_id
            {POST_JOINS}
            WHERE p.post_name = :slug AND {PUBLISHED}
            LIMIT 1
            """,
            {"slug": slug},
        )
        return rows[0] if rows else None

    async def terms_for_posts(self, post_ids: Sequence[int], taxonomy: str) -> Dict[int, str]:
        if not post_ids:
            return {}
        rows = await self.db.query(
            TERMS_FOR_POSTS, {"ids": list(post_ids), "taxonomy": taxonomy}
        )
        return {row["ID"]: row["terms"] for row in rows}

    async def terms_for_post(self, post_id: int, taxonomy: str) -> List[dict]:
        return await self.db.query(
            TERMS_FOR_POST, {"post_id": post_id, "taxonomy": taxonomy}
        )

    async def seo_for_posts(self, post_ids: Sequence[int]) -> List[dict]:
        if not post_ids:
            return []
        return await self.db.query(SEO_FOR_POSTS, {"ids": list(post_ids)})

    async def recent_with_terms(self, limit: int) -> List[dict]:
        return await self.db.query(
            f"""
            {POSTS_WITH_TERMS}
            WHERE {PUBLISHED}
            ORDER BY p.post_date DESC, p.ID DESC
            LIMIT :limit
            """,
            {"limit": limit},
        )

    async def find_category_id(self, name: str) -> Optional[int]:
        rows = await self.db.query(
            """
            SELECT t.term_id
            FROM wp_terms t
            JOIN wp_term_taxonomy tt ON t.term_id = tt.term_id AND tt.taxonomy = 'category'
            WHERE t.name = :name
            ORDER BY t.term_id
            LIMIT 1
            """,
            {"name": name},
        )
        return rows[0]["term_id"] if rows else None

    async def related_with_terms(self, term_id: int, limit: int) -> List[dict]:
        in_category = IN_CATEGORY.format(condition="cat_terms.term_id = :term_id")
        return await self.db.query(
            f"""
            {POSTS_WITH_TERMS}
            WHERE {PUBLISHED} AND {in_category}
            ORDER BY p.post_date DESC, p.ID DESC
            LIMIT :limit
            """,
            {"term_id": term_id, "limit": limit},
        )

    async def search_corpus(self) -> List[dict]:
        return await self.db.query(
            f"""
            SELECT p.ID, p.post_title, p.post_excerpt, p.post_name AS slug
            FROM wp_posts p
            WHERE {PUBLISHED}
            ORDER BY p.post_date DESC, p.ID DESC
            """
        )


def _total(rows: List[dict]) -> int:
    return int(rows[0]["total"]) if rows else 0
