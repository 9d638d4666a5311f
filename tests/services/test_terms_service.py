import asyncio

import pytest

from blog_api.errors import ValidationError
from blog_api.services.terms_service import TermsService
from tests.conftest import make_cache


class FakeTermsRepo:
    def __init__(self, categories=None, tags=None):
        self.rows = {"category": categories or [], "post_tag": tags or []}
        self.calls = []

    async def list_with_counts(self, taxonomy):
        self.calls.append(taxonomy)
        return [dict(row) for row in self.rows[taxonomy]]


def category_rows():
    return [
        {"id": i, "name": f"Cat {i}", "slug": f"cat-{i}", "post_count": count}
        for i, count in enumerate([1, 9, 4, 9, 0, 7, 2, 3, 5, 6], start=1)
    ]


def test_popular_categories_are_ranked_then_truncated():
    service = TermsService(FakeTermsRepo(categories=category_rows()), make_cache())

    result = asyncio.run(service.list_categories("3"))

    assert [c["id"] for c in result["categories"]] == [2, 4, 6]
    assert result["categories"][0] == {
        "id": 2,
        "name": "Cat 2",
        "slug": "cat-2",
        "post_count": 9,
    }


def test_all_categories_without_popular():
    service = TermsService(FakeTermsRepo(categories=category_rows()), make_cache())

    result = asyncio.run(service.list_categories())

    assert len(result["categories"]) == 10


@pytest.mark.parametrize("popular", ["abc", "0", "-2"])
def test_invalid_popular_is_rejected(popular):
    repo = FakeTermsRepo(categories=category_rows())
    service = TermsService(repo, make_cache())

    with pytest.raises(ValidationError) as exc_info:
        asyncio.run(service.list_categories(popular))
    assert exc_info.value.detail == "Invalid query parameter for popular categories"
    assert repo.calls == []


def test_categories_are_cached_per_popular_value():
    repo = FakeTermsRepo(categories=category_rows())
    service = TermsService(repo, make_cache())

    asyncio.run(service.list_categories("3"))
    asyncio.run(service.list_categories("3"))
    asyncio.run(service.list_categories())

    assert repo.calls == ["category", "category"]


def test_tags_include_zero_count_terms():
    repo = FakeTermsRepo(
        tags=[
            {"id": 1, "name": "Empty", "slug": "empty", "post_count": 0},
            {"id": 2, "name": "Python", "slug": "python", "post_count": 4},
        ]
    )
    service = TermsService(repo, make_cache())

    result = asyncio.run(service.list_tags())
    asyncio.run(service.list_tags())

    assert [t["slug"] for t in result["tags"]] == ["python", "empty"]
    assert repo.calls == ["post_tag"]
