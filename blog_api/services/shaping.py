"""
Pure transforms from raw ``wp_*`` rows into the public JSON shapes.

Nothing in here touches the database or the cache, so every function can be
exercised with plain dicts.
"""

import datetime
import hashlib
from typing import Any, Dict, Iterable, List, Mapping, Optional

from blog_api.schemas.blog import Author, SocialHandles, Term, TermRef

GRAVATAR_BASE_URL = "https://www.gravatar.com/avatar/"
SOCIAL_KEYS = tuple(SocialHandles.model_fields)

# GROUP_CONCAT separator between "name:slug" items; see repos/posts_repo.py
TERM_SEPARATOR = "||"


def gravatar_url(email: Optional[str]) -> str:
    digest = hashlib.md5((email or "").strip().lower().encode("utf-8")).hexdigest()
    return f"{GRAVATAR_BASE_URL}{digest}"


def parse_term_list(value: Optional[str], separator: str = TERM_SEPARATOR) -> List[dict]:
    """
    Parse a delimiter-joined ``name:slug`` string into an ordered list of
    ``{name, slug}``. Items without a ``:`` are the legacy name-only form and
    get ``slug=None``.
    """
    if not value:
        return []
    terms = []
    for item in value.split(separator):
        item = item.strip()
        if not item:
            continue
        name, sep, slug = item.rpartition(":")
        if not sep:
            name, slug = item, None
        terms.append(TermRef(name=name, slug=slug).model_dump())
    return terms


def shape_term_rows(rows: Iterable[Mapping[str, Any]]) -> List[dict]:
    return [TermRef(name=row["name"], slug=row.get("slug")).model_dump() for row in rows]


def shape_post(
    row: Mapping[str, Any],
    categories: List[dict],
    tags: List[dict],
    seo_rows: Iterable[Mapping[str, Any]] = (),
) -> dict:
    post = _jsonable(row)
    post_id = row.get("ID")
    seo = next((r for r in seo_rows if r.get("object_id") == post_id), None)
    post["categories"] = categories
    post["tags"] = tags
    post["yoastMeta"] = _jsonable(seo) if seo is not None else None
    return post


def shape_post_from_concat(
    row: Mapping[str, Any], seo_rows: Iterable[Mapping[str, Any]] = ()
) -> dict:
    """Shape a row carrying GROUP_CONCAT ``categories``/``tags`` strings."""
    base = {k: v for k, v in row.items() if k not in ("categories", "tags")}
    return shape_post(
        base,
        parse_term_list(row.get("categories")),
        parse_term_list(row.get("tags")),
        seo_rows,
    )


def shape_author(row: Mapping[str, Any]) -> dict:
    handles = SocialHandles(**{key: row.get(key) or "" for key in SOCIAL_KEYS})
    return Author(
        id=row["ID"],
        displayName=row.get("display_name") or "",
        description=row.get("description") or "",
        website=row.get("website") or "",
        socialHandles=handles,
        profileImage=gravatar_url(row.get("email")),
    ).model_dump()


def shape_comment(row: Mapping[str, Any]) -> dict:
    return _jsonable(row)


def rank_terms(rows: Iterable[Mapping[str, Any]], popular: Optional[int] = None) -> List[dict]:
    """Rank by descending post count (ties by ascending id), then keep the top ``popular``."""
    terms = [
        Term(
            id=row["id"],
            name=row["name"],
            slug=row["slug"],
            post_count=int(row.get("post_count") or 0),
        ).model_dump()
        for row in rows
    ]
    terms.sort(key=lambda t: (-t["post_count"], t["id"]))
    return terms if popular is None else terms[:popular]


def _jsonable(row: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: _convert_date(value) for key, value in row.items()}


def _convert_date(value):
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return value
