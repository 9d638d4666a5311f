import datetime

from blog_api.cache import ResponseCache


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_cache(ttl: float = 60, clock: FakeClock | None = None) -> ResponseCache:
    return ResponseCache(ttl_seconds=ttl, timer=clock or FakeClock())


class FakeDatabase:
    """
    Minimal Database stand-in.
    Records every (sql, params) pair and answers with the rows of the first
    rule whose fragment appears in the SQL text.
    """

    def __init__(self, rules=None, rowcount: int = 1, error: Exception | None = None):
        self.rules = rules or []
        self.rowcount = rowcount
        self.error = error
        self.queries = []
        self.executed = []

    async def query(self, sql, params=None):
        self.queries.append((sql, dict(params or {})))
        if self.error:
            raise self.error
        for fragment, rows in self.rules:
            if fragment in sql:
                return [dict(row) for row in rows]
        return []

    async def execute(self, sql, params=None):
        self.executed.append((sql, dict(params or {})))
        if self.error:
            raise self.error
        return self.rowcount

    async def dispose(self):
        pass


def make_post_row(post_id: int, slug: str, title: str = "Title", **extra) -> dict:
    row = {
        "ID": post_id,
        "post_author": 1,
        "post_date": datetime.datetime(2024, 5, post_id % 28 + 1, 9, 30),
        "post_modified": datetime.datetime(2024, 6, 1, 12, 0),
        "post_content": f"<p>{title} body</p>",
        "post_title": title,
        "post_excerpt": f"{title} excerpt",
        "post_status": "publish",
        "comment_status": "open",
        "ping_status": "open",
        "post_name": slug,
        "comment_count": 0,
        "thumbnail_url": f"https://cdn.example.com/{slug}.jpg",
        "author_name": "Jane Writer",
    }
    row.update(extra)
    return row


class FakePostsRepo:
    """
    In-memory PostsRepo stand-in used in service tests.
    ``calls`` records the name of every repo method invoked.
    """

    def __init__(
        self,
        posts=None,
        categories=None,
        tags=None,
        seo=None,
        category_ids=None,
        post_terms=None,
    ):
        self.posts = posts or []
        self.categories = categories or {}
        self.tags = tags or {}
        self.seo = seo or []
        self.category_ids = category_ids or {}
        self.post_terms = post_terms or {}
        self.calls = []

    async def list_published(self, limit, offset):
        self.calls.append("list_published")
        return [dict(p) for p in self.posts[offset : offset + limit]]

    async def count_published(self):
        self.calls.append("count_published")
        return len(self.posts)

    async def list_by_author(self, author_id, limit, offset):
        self.calls.append("list_by_author")
        rows = [p for p in self.posts if p["post_author"] == author_id]
        return [dict(p) for p in rows[offset : offset + limit]]

    async def count_by_author(self, author_id):
        self.calls.append("count_by_author")
        return len([p for p in self.posts if p["post_author"] == author_id])

    async def list_by_category(self, category_slug, limit, offset):
        self.calls.append("list_by_category")
        rows = [p for p in self.posts if category_slug in (self.categories.get(p["ID"]) or "")]
        return [dict(p) for p in rows[offset : offset + limit]]

    async def count_by_category(self, category_slug):
        self.calls.append("count_by_category")
        return len(
            [p for p in self.posts if category_slug in (self.categories.get(p["ID"]) or "")]
        )

    async def get_by_slug(self, slug):
        self.calls.append("get_by_slug")
        return next((dict(p) for p in self.posts if p["post_name"] == slug), None)

    async def terms_for_posts(self, post_ids, taxonomy):
        self.calls.append(f"terms_for_posts:{taxonomy}")
        source = self.categories if taxonomy == "category" else self.tags
        return {pid: source[pid] for pid in post_ids if pid in source}

    async def terms_for_post(self, post_id, taxonomy):
        self.calls.append(f"terms_for_post:{taxonomy}")
        return list(self.post_terms.get((post_id, taxonomy), []))

    async def seo_for_posts(self, post_ids):
        self.calls.append("seo_for_posts")
        return [dict(r) for r in self.seo if r["object_id"] in post_ids]

    async def recent_with_terms(self, limit):
        self.calls.append("recent_with_terms")
        return [
            {
                **p,
                "categories": self.categories.get(p["ID"]),
                "tags": self.tags.get(p["ID"]),
            }
            for p in self.posts[:limit]
        ]

    async def find_category_id(self, name):
        self.calls.append("find_category_id")
        return self.category_ids.get(name)

    async def related_with_terms(self, term_id, limit):
        self.calls.append("related_with_terms")
        return [
            {
                **p,
                "categories": self.categories.get(p["ID"]),
                "tags": self.tags.get(p["ID"]),
            }
            for p in self.posts[:limit]
        ]

    async def search_corpus(self):
        self.calls.append("search_corpus")
        return [
            {
                "ID": p["ID"],
                "post_title": p["post_title"],
                "post_excerpt": p["post_excerpt"],
                "slug": p["post_name"],
            }
            for p in self.posts
        ]


class FakeCommentsRepo:
    """Stores inserted comments so they can be listed back."""

    def __init__(self, comments=None):
        self.comments = list(comments or [])
        self.inserted = []

    async def list_approved(self, post_id):
        return [dict(c) for c in self.comments if c["comment_post_ID"] == post_id]

    async def insert_approved(self, post_id, name, email, website, content):
        row = {
            "comment_ID": len(self.comments) + 1,
            "comment_post_ID": post_id,
            "comment_author": name,
            "comment_author_email": email,
            "comment_author_url": website,
            "comment_content": content,
            "comment_approved": "1",
        }
        self.inserted.append(row)
        self.comments.append(row)
        return 1


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(self, list_posts_return=None, get_post_return=None, error=None):
        self._list_posts_return = list_posts_return or {}
        self._get_post_return = get_post_return
        self.error = error
        self.calls = []

    async def list_posts(self, page=None, limit=None):
        self.calls.append(("list_posts", page, limit))
        if self.error:
            raise self.error
        return self._list_posts_return

    async def get_post(self, slug):
        self.calls.append(("get_post", slug))
        if self.error:
            raise self.error
        return self._get_post_return

    async def recent_posts(self):
        self.calls.append(("recent_posts",))
        return self._list_posts_return

    async def related_posts(self, category_name):
        self.calls.append(("related_posts", category_name))
        return self._list_posts_return

    async def posts_by_author(self, author_id, page=None, limit=None):
        self.calls.append(("posts_by_author", author_id, page, limit))
        return self._list_posts_return

    async def posts_by_category(self, category_slug, page=None, limit=None):
        self.calls.append(("posts_by_category", category_slug, page, limit))
        return self._list_posts_return
