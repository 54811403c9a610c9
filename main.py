from contextlib import asynccontextmanager
import logging
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
from prometheus_fastapi_instrumentator import Instrumentator, metrics
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from redis import asyncio as aioredis
from redis.exceptions import RedisError

from core.config import get_settings
from core.logging_config import setup_logging
from core.unit_of_work import UnitOfWorkManager, create_db_and_tables
from dependencies import (
    engine, get_unit_of_work_manager, log_requests, setup_error_handlers
)
from routers import (
    topics_router,
    categories_router,
    members_router,
    tags_router,
)

# Initialize settings and logging
settings = get_settings()
setup_logging(json_logs=settings.LOG_JSON)
logger = logging.getLogger(__name__)


def custom_generate_unique_id(route: APIRoute):
    return f"{route.tags[0] if route.tags else ''}-{route.name}"

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Setup and cleanup tasks for the application lifecycle"""
    create_db_and_tables(engine)
    # Connections are opened lazily, flood control tolerates Redis being down
    app.state.redis = aioredis.from_url(
        settings.REDIS_URL, encoding="utf8", decode_responses=True
    )
    logger.info(f"Flood control using Redis at {settings.REDIS_URL}")
    try:
        yield
    finally:
        await app.state.redis.aclose()
        app.state.redis = None

def create_application() -> FastAPI:
    """Create and configure the FastAPI application"""
    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url=settings.DOCS_URL,
        redoc_url=settings.REDOC_URL,
        openapi_url=settings.OPENAPI_URL,
        openapi_tags=settings.OPENAPI_TAGS,
        lifespan=lifespan,
        generate_unique_id_function=custom_generate_unique_id,
    )

    # Add middleware
    app.middleware("http")(log_requests)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add error handlers
    setup_error_handlers(app)

    # Enhanced instrumentation
    Instrumentator().instrument(app)\
        .add(metrics.request_size())\
        .add(metrics.response_size())\
        .add(metrics.latency(buckets=[0.1, 0.5, 1.0, 2.0, 3.0, 4.0, 5.0]))\
        .add(metrics.requests(should_include_handler=True))\
        .expose(app, include_in_schema=True, should_gzip=True)

    # Include routers
    app.include_router(topics_router, prefix="/topics", tags=["topics"])
    app.include_router(categories_router, prefix="/categories", tags=["categories"])
    app.include_router(members_router, prefix="/members", tags=["members"])
    app.include_router(tags_router, prefix="/tags", tags=["tags"])

    @app.get("/health")
    async def health_check(
        manager: UnitOfWorkManager = Depends(get_unit_of_work_manager),
    ):
        """Health check endpoint for monitoring"""
        try:
            # Check database connection
            with manager.new_unit_of_work() as unit_of_work:
                unit_of_work.session.connection().execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"Health check failed: {str(e)}")
            raise HTTPException(
                status_code=503,
                detail="Service unavailable"
            )

        # Flood control runs without Redis
        redis_status = "unavailable"
        redis = getattr(app.state, "redis", None)
        if redis is not None:
            try:
                await redis.ping()
                redis_status = "ok"
            except RedisError as e:
                logger.warning(f"Redis health check failed: {str(e)}")

        return {
            "status": "healthy" if redis_status == "ok" else "degraded",
            "database": "ok",
            "redis": redis_status,
            "timestamp": datetime.now(timezone.utc),
            "version": settings.APP_VERSION
        }

    return app

# Create the FastAPI application
app = create_application()

def main():
    """Main function for direct script execution"""
    create_db_and_tables(engine)
    try:
        from seed_data import create_test_data
        create_test_data()
    except Exception as e:
        logger.error(f"Failed to create test data: {e}")

if __name__ == "__main__":
    main()
