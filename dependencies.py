from typing import Annotated, Iterator
from uuid import uuid4
import logging
from time import time

from fastapi import Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from sqlalchemy.exc import MultipleResultsFound

from core.config import get_settings
from core.exceptions import ForumError
from core.unit_of_work import UnitOfWork, UnitOfWorkManager, build_engine
from models import Topic, TopicPublic, TopicPage, PagedList
from repositories import TopicRepository
from services.topic_tag import TopicTagService

settings = get_settings()
logger = logging.getLogger(__name__)
engine = build_engine()
unit_of_work_manager = UnitOfWorkManager(engine)

# Unit of work dependencies
def get_unit_of_work_manager() -> UnitOfWorkManager:
    return unit_of_work_manager

def get_unit_of_work(
    manager: Annotated[UnitOfWorkManager, Depends(get_unit_of_work_manager)],
) -> Iterator[UnitOfWork]:
    with manager.new_unit_of_work() as unit_of_work:
        yield unit_of_work

UnitOfWorkDep = Annotated[UnitOfWork, Depends(get_unit_of_work)]

def get_topic_repository(unit_of_work: UnitOfWorkDep) -> TopicRepository:
    return TopicRepository(unit_of_work.session)

def get_topic_tag_service(unit_of_work: UnitOfWorkDep) -> TopicTagService:
    return TopicTagService(unit_of_work.session)

TopicRepositoryDep = Annotated[TopicRepository, Depends(get_topic_repository)]
TopicTagServiceDep = Annotated[TopicTagService, Depends(get_topic_tag_service)]

# Flood control dependency
async def rate_limit(redis, key_prefix: str, limit: int, window: int = 60):
    key = f"rate_limit:{key_prefix}:{int(time() // window)}"
    try:
        requests = await redis.incr(key)
        if requests == 1:
            await redis.expire(key, window)
    except RedisError as e:
        logger.error(f"Rate limit error: {str(e)}")
        return

    if requests > limit:
        raise HTTPException(status_code=429, detail="Too many requests")

async def topic_flood_control(request: Request):
    """Limit how many topics one member starts per minute"""
    redis = getattr(request.app.state, "redis", None)
    if redis is None:
        return
    # The body is read and cached before dependencies run
    try:
        body = await request.json()
    except ValueError:
        return
    member_id = body.get("member_id") if isinstance(body, dict) else None
    if not member_id:
        # Left to body validation
        return
    await rate_limit(redis, f"topics:{member_id}", settings.TOPICS_PER_MINUTE)

# Middleware
async def log_requests(request: Request, call_next):
    start_time = time()
    response = await call_next(request)
    process_time = time() - start_time

    logger.info(
        f"Path: {request.url.path} | "
        f"Method: {request.method} | "
        f"Status: {response.status_code} | "
        f"Process Time: {process_time:.2f}s"
    )
    return response

# Error handlers
def setup_error_handlers(app):
    @app.exception_handler(MultipleResultsFound)
    async def duplicate_slug_handler(request: Request, exc: MultipleResultsFound):
        logger.error(f"Duplicate slug on {request.url.path}: {str(exc)}")
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": "Slug is not unique"},
        )

    @app.exception_handler(ForumError)
    async def forum_exception_handler(request: Request, exc: ForumError):
        error_id = str(uuid4())
        logger.error(
            f"Forum error {error_id}: {str(exc)}",
            extra={"path": request.url.path, "method": request.method, "error_id": error_id},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc), "error_id": error_id},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        error_id = str(uuid4())
        logger.error(
            f"Unhandled error {error_id}: {str(exc)}",
            exc_info=True,
            extra={
                "path": request.url.path,
                "method": request.method,
                "error_id": error_id,
            },
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "An unexpected error occurred", "error_id": error_id},
        )


def to_topic_public(topic: Topic) -> TopicPublic:
    """Helper function to convert Topic to TopicPublic with its tag labels"""
    topic_dict = topic.model_dump()
    topic_dict["tags"] = [tag.tag for tag in topic.tags]
    return TopicPublic(**topic_dict)


def to_topic_page(paged: PagedList[Topic]) -> TopicPage:
    return TopicPage(
        topics=[to_topic_public(topic) for topic in paged],
        page_index=paged.page_index,
        page_size=paged.page_size,
        total_count=paged.total_count,
        total_pages=paged.total_pages,
        has_previous_page=paged.has_previous_page,
        has_next_page=paged.has_next_page,
    )
