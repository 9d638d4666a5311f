from fastapi import Depends, Request

from blog_api.cache import ResponseCache
from blog_api.db.mysql import Database
from blog_api.repos.authors_repo import AuthorsRepo
from blog_api.repos.comments_repo import CommentsRepo
from blog_api.repos.posts_repo import PostsRepo
from blog_api.repos.terms_repo import TermsRepo
from blog_api.services.authors_service import AuthorsService
from blog_api.services.comments_service import CommentsService
from blog_api.services.posts_service import PostsService
from blog_api.services.search_service import SearchService
from blog_api.services.terms_service import TermsService


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_cache(request: Request) -> ResponseCache:
    return request.app.state.cache


def get_posts_repo(db=Depends(get_database)):
    return PostsRepo(db)


def get_comments_repo(db=Depends(get_database)):
    return CommentsRepo(db)


def get_posts_service(
    repo=Depends(get_posts_repo),
    comments_repo=Depends(get_comments_repo),
    cache=Depends(get_cache),
):
    return PostsService(repo=repo, comments_repo=comments_repo, cache=cache)


def get_search_service(repo=Depends(get_posts_repo), cache=Depends(get_cache)):
    return SearchService(repo=repo, cache=cache)


def get_comments_service(repo=Depends(get_comments_repo)):
    return CommentsService(repo)


def get_authors_service(db=Depends(get_database), cache=Depends(get_cache)):
    return AuthorsService(repo=AuthorsRepo(db), cache=cache)


def get_terms_service(db=Depends(get_database), cache=Depends(get_cache)):
    return TermsService(repo=TermsRepo(db), cache=cache)
