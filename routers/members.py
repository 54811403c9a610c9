from typing import List
from uuid import UUID
from fastapi import APIRouter

from models import TopicPublic
from dependencies import TopicRepositoryDep, to_topic_public

router = APIRouter()


@router.get("/{member_id}/topics", response_model=List[TopicPublic])
async def get_member_topics(member_id: UUID, topics: TopicRepositoryDep):
    """Get all topics started by a member"""
    return [to_topic_public(topic) for topic in topics.get_topics_by_user(member_id)]

@router.get("/{member_id}/topics/solved", response_model=List[TopicPublic])
async def get_member_solved_topics(member_id: UUID, topics: TopicRepositoryDep):
    """Get a member's topics that have an accepted solution"""
    return [to_topic_public(topic) for topic in topics.get_solved_topics_by_member(member_id)]
