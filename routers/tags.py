from fastapi import APIRouter, Depends, Query
import logging

from models import PopularTag, PopularTagViewModel, TopicPage
from dependencies import (
    TopicRepositoryDep, get_unit_of_work_manager, to_topic_page
)
from core.config import get_settings
from core.unit_of_work import UnitOfWorkManager
from services.topic_tag import TopicTagService

router = APIRouter()
settings = get_settings()
logger = logging.getLogger(__name__)


@router.get("/popular", response_model=PopularTagViewModel, include_in_schema=False)
async def popular_tags(
    manager: UnitOfWorkManager = Depends(get_unit_of_work_manager),
) -> PopularTagViewModel:
    """Fragment listing the most used tags, embedded by the forum pages"""
    with manager.new_unit_of_work() as unit_of_work:
        tag_service = TopicTagService(unit_of_work.session)
        popular = tag_service.get_popular_tags(settings.POPULAR_TAGS_AMOUNT)
        return PopularTagViewModel(popular_tags=[
            PopularTag(tag=tag.tag, slug=tag.slug, count=count)
            for tag, count in popular
        ])

@router.get("/{tag}/topics", response_model=TopicPage)
async def get_tag_topics(
    tag: str,
    topics: TopicRepositoryDep,
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.TOPICS_PER_PAGE, ge=1, le=100),
) -> TopicPage:
    """Get a page of topics carrying a tag, sticky topics first"""
    paged = topics.get_paged_topics_by_tag(
        page, page_size, settings.ACTIVE_TOPICS_TAKE, tag
    )
    return to_topic_page(paged)
