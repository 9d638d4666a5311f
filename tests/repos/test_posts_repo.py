import asyncio

from blog_api.repos.posts_repo import PostsRepo
from tests.conftest import FakeDatabase, make_post_row


def test_list_published_binds_limit_and_offset():
    db = FakeDatabase(rules=[("LIMIT :limit", [make_post_row(1, "first")])])
    repo = PostsRepo(db)

    rows = asyncio.run(repo.list_published(limit=10, offset=20))

    sql, params = db.queries[0]
    assert rows[0]["post_name"] == "first"
    assert params == {"limit": 10, "offset": 20}
    assert "LIMIT :limit OFFSET :offset" in sql
    assert "p.post_status = 'publish'" in sql
    assert "20" not in sql


def test_count_published_reads_total_column():
    db = FakeDatabase(rules=[("COUNT(*)", [{"total": 7}])])

    assert asyncio.run(PostsRepo(db).count_published()) == 7


def test_count_returns_zero_without_rows():
    assert asyncio.run(PostsRepo(FakeDatabase()).count_by_author(3)) == 0


def test_category_slug_is_bound_not_formatted():
    db = FakeDatabase()
    repo = PostsRepo(db)
    hostile = "news' OR '1'='1"

    asyncio.run(repo.list_by_category(hostile, limit=5, offset=0))
    asyncio.run(repo.count_by_category(hostile))

    for sql, params in db.queries:
        assert hostile not in sql
        assert params["category_slug"] == hostile
        assert "tt.taxonomy = 'category'" in sql


def test_get_by_slug_returns_first_row_or_none():
    db = FakeDatabase(rules=[("p.post_name = :slug", [make_post_row(4, "hello")])])

    found = asyncio.run(PostsRepo(db).get_by_slug("hello"))
    missing = asyncio.run(PostsRepo(FakeDatabase()).get_by_slug("nope"))

    assert found["ID"] == 4
    assert missing is None
    assert db.queries[0][1] == {"slug": "hello"}


def test_terms_for_posts_binds_id_list_and_maps_by_post():
    db = FakeDatabase(
        rules=[("GROUP_CONCAT", [{"ID": 1, "terms": "News:news"}, {"ID": 2, "terms": "Tech:tech"}])]
    )
    repo = PostsRepo(db)

    terms = asyncio.run(repo.terms_for_posts([1, 2], "category"))

    sql, params = db.queries[0]
    assert terms == {1: "News:news", 2: "Tech:tech"}
    assert params == {"ids": [1, 2], "taxonomy": "category"}
    assert "IN :ids" in sql
    assert "SEPARATOR '||'" in sql


def test_terms_and_seo_skip_query_for_empty_id_list():
    db = FakeDatabase()
    repo = PostsRepo(db)

    assert asyncio.run(repo.terms_for_posts([], "post_tag")) == {}
    assert asyncio.run(repo.seo_for_posts([])) == []
    assert db.queries == []


def test_seo_for_posts_reads_yoast_table():
    db = FakeDatabase(rules=[("wp_yoast_indexable", [{"object_id": 3, "title": "T"}])])

    rows = asyncio.run(PostsRepo(db).seo_for_posts((3,)))

    assert rows == [{"object_id": 3, "title": "T"}]
    assert db.queries[0][1] == {"ids": [3]}


def test_find_category_id_resolves_by_name():
    db = FakeDatabase(rules=[("WHERE t.name = :name", [{"term_id": 12}])])

    assert asyncio.run(PostsRepo(db).find_category_id("Tech")) == 12
    assert asyncio.run(PostsRepo(FakeDatabase()).find_category_id("Tech")) is None


def test_related_and_recent_fold_terms_into_strings():
    db = FakeDatabase()
    repo = PostsRepo(db)

    asyncio.run(repo.recent_with_terms(3))
    asyncio.run(repo.related_with_terms(12, 2))

    (recent_sql, recent_params), (related_sql, related_params) = db.queries
    assert recent_params == {"limit": 3}
    assert related_params == {"term_id": 12, "limit": 2}
    for sql in (recent_sql, related_sql):
        assert "AS categories" in sql
        assert "AS tags" in sql


def test_search_corpus_selects_slug_alias():
    db = FakeDatabase()

    asyncio.run(PostsRepo(db).search_corpus())

    sql, params = db.queries[0]
    assert "p.post_name AS slug" in sql
    assert params == {}
