from typing import List, Optional

from blog_api.db.mysql import Database

AUTHORS_SQL = """
    SELECT
        u.ID,
        u.display_name,
        u.user_url AS website,
        MAX(CASE WHEN um.meta_key = 'facebook' THEN um.meta_value END) AS facebook,
        MAX(CASE WHEN um.meta_key = 'instagram' THEN um.meta_value END) AS instagram,
        MAX(CASE WHEN um.meta_key = 'linkedin' THEN um.meta_value END) AS linkedin,
        MAX(CASE WHEN um.meta_key = 'tumblr' THEN um.meta_value END) AS tumblr,
        MAX(CASE WHEN um.meta_key = 'twitter' THEN um.meta_value END) AS twitter,
        MAX(CASE WHEN um.meta_key = 'youtube' THEN um.meta_value END) AS youtube,
        MAX(CASE WHEN um.meta_key = 'wikipedia' THEN um.meta_value END) AS wikipedia,
        MAX(CASE WHEN um.meta_key = 'pinterest' THEN um.meta_value END) AS pinterest,
        MAX(CASE WHEN um.meta_key = 'description' THEN um.meta_value END) AS description,
        u.user_email AS email
    FROM wp_users u
    LEFT JOIN wp_usermeta um ON u.ID = um.user_id
    {where}
    GROUP BY u.ID, u.display_name, u.user_url, u.user_email
    ORDER BY u.ID
"""


class AuthorsRepo:
    def __init__(self, db: Database):
        self.db = db

    async def list_authors(self, author_id: Optional[int] = None) -> List[dict]:
        if author_id is None:
            return await self.db.query(AUTHORS_SQL.format(where=""))
        return await self.db.query(
            AUTHORS_SQL.format(where="WHERE u.ID = :author_id"),
            {"author_id": author_id},
        )
