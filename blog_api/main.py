import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blog_api.config import settings
from blog_api.database import Database
from blog_api.error_handlers import register_error_handlers
from blog_api.logging_config import configure_logging
from blog_api.middleware import RequestLoggingMiddleware
from blog_api.routers import articles, auth, comments, tags, users

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
    app.state.database = database
    logger.info("Blog API started (%s)", settings.APP_ENV)
    yield
    # Shutdown
    await database.dispose()


app = FastAPI(
    title="Blog API",
    description="CRUD REST backend for users, articles, tags and threaded comments",
    version="1.0.0",
    lifespan=lifespan,
)

# Middleware
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Routers
app.include_router(users.router)
app.include_router(auth.router)
app.include_router(tags.router)
app.include_router(articles.router)
app.include_router(comments.router)


@app.get("/health")
async def health():
    return {"status": "healthy", "version": "1.0.0"}
