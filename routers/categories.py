from typing import List
from uuid import UUID
from fastapi import APIRouter, Query
import logging

from models import TopicPage, TopicPublic
from dependencies import TopicRepositoryDep, to_topic_public, to_topic_page
from core.config import get_settings

router = APIRouter()
settings = get_settings()
logger = logging.getLogger(__name__)


@router.get("/{category_id}/topics", response_model=TopicPage)
async def get_category_topics(
    category_id: UUID,
    topics: TopicRepositoryDep,
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.TOPICS_PER_PAGE, ge=1, le=100),
) -> TopicPage:
    """Get a page of a category's topics, sticky topics first"""
    paged = topics.get_paged_topics_by_category(
        page, page_size, settings.ACTIVE_TOPICS_TAKE, category_id
    )
    return to_topic_page(paged)

@router.get("/{category_id}/topics/all", response_model=List[TopicPublic])
async def get_all_category_topics(category_id: UUID, topics: TopicRepositoryDep):
    return [to_topic_public(topic) for topic in topics.get_all_topics_by_category(category_id)]

@router.get("/{category_id}/topics/rss", response_model=List[TopicPublic])
async def get_category_rss_topics(
    category_id: UUID,
    topics: TopicRepositoryDep,
    amount: int = Query(settings.RSS_TOPICS_AMOUNT, ge=1, le=100),
):
    """Get a category's newest topics for its RSS feed"""
    return [
        to_topic_public(topic)
        for topic in topics.get_rss_topics_by_category(amount, category_id)
    ]
