from typing import List, Tuple
import logging

from sqlalchemy import func
from sqlmodel import Session, select

from models import TopicTag, TopicTagLink
from services.slugs import create_url_friendly

logger = logging.getLogger(__name__)


class TopicTagService:
    def __init__(self, session: Session):
        self.session = session

    def get_popular_tags(self, max_count: int) -> List[Tuple[TopicTag, int]]:
        """Most used tags with the number of topics carrying each, most used first"""
        topic_count = func.count(TopicTagLink.topic_id).label("topic_count")
        query = (
            select(TopicTag, topic_count)
            .join(TopicTagLink, TopicTagLink.topic_tag_id == TopicTag.id)
            .group_by(TopicTag.id)
            .order_by(topic_count.desc(), TopicTag.tag)
            .limit(max_count)
        )
        return [(tag, count) for tag, count in self.session.exec(query).all()]

    def get_or_create(self, tags: List[str]) -> List[TopicTag]:
        """Resolve tag labels to TopicTag rows, registering any new ones"""
        resolved = []
        for label in dict.fromkeys(t.strip().lower() for t in tags):
            if not label:
                continue
            tag = self.session.exec(select(TopicTag).where(TopicTag.tag == label)).first()
            if not tag:
                tag = TopicTag(tag=label, slug=create_url_friendly(label))
                self.session.add(tag)
                logger.info(f"Created tag '{label}'")
            resolved.append(tag)
        return resolved
