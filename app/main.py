import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.errors import ContentSourceError
from app.routers import posts, search, sitemap
from app.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Alice Blog API", description="Posts, search and sitemap")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["GET"],
)


@app.exception_handler(ContentSourceError)
async def content_source_error_handler(request: Request, exc: ContentSourceError):
    logger.error(f"Content source unavailable for {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": "Content source unavailable"})


app.include_router(posts.router)
app.include_router(search.router)
app.include_router(sitemap.router)


@app.get("/")
async def root():
    return {"message": "Alice Blog API is running"}
