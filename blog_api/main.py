import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blog_api.cache import ResponseCache
from blog_api.db.mysql import create_database
from blog_api.errors import BlogAPIError, blog_api_error_handler
from blog_api.routers import authors, comments, posts, terms
from blog_api.security import get_api_key
from blog_api.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Both route trees share one handler set; "/api" is the historical prefix
ROUTE_PREFIXES = ("", "/api")
CONTENT_ROUTERS = (posts.router, comments.router, authors.router, terms.router)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.database = create_database(settings)
    app.state.cache = ResponseCache(ttl_seconds=settings.CACHE_TTL_SECONDS)
    logger.info(
        f"Blog API started (cache TTL {settings.CACHE_TTL_SECONDS}s, "
        f"pool size {settings.DB_POOL_SIZE})"
    )

    try:
        yield
    finally:
        app.state.cache.shutdown()
        await app.state.database.dispose()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="Blog API",
    description="Posts, authors, categories, tags and comments from a WordPress database",
    docs_url="/api-docs",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "x-api-key"],
)
app.add_exception_handler(BlogAPIError, blog_api_error_handler)

for prefix in ROUTE_PREFIXES:
    for router in CONTENT_ROUTERS:
        app.include_router(
            router,
            prefix=prefix,
            dependencies=[Depends(get_api_key)],
            include_in_schema=prefix == "",
        )


@app.get("/")
async def root():
    return {"message": "Blog API is running"}
