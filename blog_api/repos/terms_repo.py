from typing import List

from blog_api.db.mysql import Database

CATEGORY = "category"
TAG = "post_tag"


class TermsRepo:
    """Categories and tags with their published-post counts."""

    def __init__(self, db: Database):
        self.db = db

    async def list_with_counts(self, taxonomy: str) -> List[dict]:
        return await self.db.query(
            """
            SELECT
                t.term_id AS id,
                t.name,
                t.slug,
                COUNT(DISTINCT p.ID) AS post_count
            FROM wp_terms t
            INNER JOIN wp_term_taxonomy tt ON t.term_id = tt.term_id
            LEFT JOIN wp_term_relationships tr ON tt.term_taxonomy_id = tr.term_taxonomy_id
            LEFT JOIN wp_posts p
                ON tr.object_id = p.ID AND p.post_type = 'post' AND p.post_status = 'publish'
            WHERE tt.taxonomy = :taxonomy
            GROUP BY t.term_id, t.name, t.slug
            ORDER BY post_count DESC, t.term_id ASC
            """,
            {"taxonomy": taxonomy},
        )
