from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, status
import logging

from prometheus_client import Counter

from models import (
    Topic, TopicCreate, TopicUpdate, TopicPublic, TopicPage, Post,
    Category, Member, BasicResponse, CountResponse
)
from dependencies import (
    UnitOfWorkDep, TopicRepositoryDep, TopicTagServiceDep,
    topic_flood_control, to_topic_public, to_topic_page
)
from core.config import get_settings
from services.slugs import create_url_friendly, generate_slug

router = APIRouter()
settings = get_settings()
logger = logging.getLogger(__name__)

topics_created_total = Counter(
    "forum_topics_created_total",
    "Total number of topics created through the API"
)


@router.get("", response_model=TopicPage)
async def get_topics(
    topics: TopicRepositoryDep,
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.TOPICS_PER_PAGE, ge=1, le=100),
) -> TopicPage:
    """Get all topics, sticky topics first and then newest first"""
    paged = topics.get_paged_topics_all(page, page_size, settings.ACTIVE_TOPICS_TAKE)
    return to_topic_page(paged)

@router.get("/recent", response_model=TopicPage)
async def get_recent_topics(
    topics: TopicRepositoryDep,
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.TOPICS_PER_PAGE, ge=1, le=100),
) -> TopicPage:
    """Get the newest topics"""
    paged = topics.get_recent_topics(page, page_size, settings.ACTIVE_TOPICS_TAKE)
    return to_topic_page(paged)

@router.get("/popular", response_model=List[TopicPublic])
async def get_highest_viewed_topics(
    topics: TopicRepositoryDep,
    amount: int = Query(10, ge=1, le=100),
):
    """Get the most viewed topics"""
    return [to_topic_public(topic) for topic in topics.get_highest_viewed_topics(amount)]

@router.get("/rss", response_model=List[TopicPublic])
async def get_rss_topics(
    topics: TopicRepositoryDep,
    amount: int = Query(settings.RSS_TOPICS_AMOUNT, ge=1, le=100),
):
    """Get the newest topics for the RSS feed"""
    return [to_topic_public(topic) for topic in topics.get_recent_rss_topics(amount)]

@router.get("/count", response_model=CountResponse)
async def get_topic_count(topics: TopicRepositoryDep) -> CountResponse:
    return CountResponse(count=topics.topic_count())

@router.get("/search", response_model=List[TopicPublic])
async def search_topics_by_slug(
    topics: TopicRepositoryDep,
    slug: str = Query(..., min_length=1),
):
    """Get topics whose slug contains the given text"""
    return [to_topic_public(topic) for topic in topics.get_topic_by_slug_like(slug)]

@router.get("/slug/{slug}", response_model=TopicPublic)
async def get_topic_by_slug(slug: str, topics: TopicRepositoryDep) -> TopicPublic:
    topic = topics.get_topic_by_slug(slug)
    if not topic:
        raise HTTPException(status_code=404, detail="Topic not found")
    return to_topic_public(topic)

@router.post(
    "",
    response_model=TopicPublic,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(topic_flood_control)]
)
async def create_topic(
    topic: TopicCreate,
    unit_of_work: UnitOfWorkDep,
    topics: TopicRepositoryDep,
    topic_tags: TopicTagServiceDep,
) -> TopicPublic:
    """Start a new topic with its first post"""
    session = unit_of_work.session
    if not session.get(Category, topic.category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    if not session.get(Member, topic.member_id):
        raise HTTPException(status_code=404, detail="Member not found")
    if not topic.name.strip():
        raise HTTPException(status_code=400, detail="Topic name is not valid")

    similar = topics.get_topic_by_slug_like(create_url_friendly(topic.name))
    topic_db = Topic(
        name=topic.name.strip(),
        slug=generate_slug(topic.name, [t.slug for t in similar]),
        is_sticky=topic.is_sticky,
        is_locked=topic.is_locked,
        category_id=topic.category_id,
        member_id=topic.member_id,
    )
    topic_db.tags = topic_tags.get_or_create(topic.tags)
    topics.add(topic_db)

    topic_db.posts.append(Post(
        post_content=topic.post_content,
        is_topic_starter=True,
        topic_id=topic_db.id,
        member_id=topic.member_id,
    ))

    unit_of_work.commit()
    topics_created_total.inc()
    logger.info(f"Topic {topic_db.id} created in category {topic_db.category_id}")

    return to_topic_public(topic_db)

@router.get("/{topic_id}", response_model=TopicPublic)
async def get_topic(topic_id: UUID, topics: TopicRepositoryDep) -> TopicPublic:
    """Get a specific topic by ID"""
    topic = topics.get(topic_id)
    if not topic:
        raise HTTPException(status_code=404, detail="Topic not found")
    return to_topic_public(topic)

@router.post("/{topic_id}/view", response_model=TopicPublic)
async def track_topic_view(
    topic_id: UUID,
    unit_of_work: UnitOfWorkDep,
    topics: TopicRepositoryDep,
) -> TopicPublic:
    """Count a view of a topic"""
    topic = topics.get(topic_id)
    if not topic:
        raise HTTPException(status_code=404, detail="Topic not found")
    topic.views += 1
    unit_of_work.commit()
    return to_topic_public(topic)

@router.patch("/{topic_id}", response_model=TopicPublic)
async def update_topic(
    topic_id: UUID,
    topic: TopicUpdate,
    unit_of_work: UnitOfWorkDep,
    topics: TopicRepositoryDep,
) -> TopicPublic:
    """Update a topic's name or flags"""
    topic_db = topics.get(topic_id)
    if not topic_db:
        raise HTTPException(status_code=404, detail="Topic not found")

    # Loaded in this unit of work, so changes save on commit
    topic_data = topic.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in topic_data:
        if not topic_data["name"].strip():
            raise HTTPException(status_code=400, detail="Topic name is not valid")
        topic_data["name"] = topic_data["name"].strip()
    topic_db.sqlmodel_update(topic_data)
    unit_of_work.commit()
    return to_topic_public(topic_db)

@router.delete("/{topic_id}", response_model=BasicResponse)
async def delete_topic(
    topic_id: UUID,
    unit_of_work: UnitOfWorkDep,
    topics: TopicRepositoryDep,
) -> BasicResponse:
    """Delete a topic and its posts"""
    topic = topics.get(topic_id)
    if not topic:
        raise HTTPException(status_code=404, detail="Topic not found")
    topics.delete(topic)
    unit_of_work.commit()
    logger.info(f"Topic {topic_id} deleted")
    return BasicResponse(message="Topic deleted successfully")
