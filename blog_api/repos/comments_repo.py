from typing import List

from blog_api.db.mysql import Database


class CommentsRepo:
    def __init__(self, db: Database):
        self.db = db

    async def list_approved(self, post_id: int) -> List[dict]:
        return await self.db.query(
            """
            SELECT
                c.comment_ID,
                c.comment_post_ID,
                c.comment_author,
                c.comment_author_email,
                c.comment_author_url,
                c.comment_date,
                c.comment_date_gmt,
                c.comment_content,
                c.comment_karma,
                c.comment_approved
            FROM wp_comments c
            WHERE c.comment_post_ID = :post_id AND c.comment_approved = '1'
            ORDER BY c.comment_date ASC, c.comment_ID ASC
            """,
            {"post_id": post_id},
        )

    async def insert_approved(
        self, post_id: int, name: str, email: str, website: str, content: str
    ) -> int:
        return await self.db.execute(
            """
            INSERT INTO wp_comments (
                comment_post_ID, comment_author, comment_author_email,
                comment_author_url, comment_content, comment_date, comment_date_gmt,
                comment_approved
            )
            VALUES (:post_id, :name, :email, :website, :content, NOW(), UTC_TIMESTAMP(), '1')
            """,
            {
                "post_id": post_id,
                "name": name,
                "email": email,
                "website": website,
                "content": content,
            },
        )
