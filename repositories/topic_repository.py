from typing import List, Optional
from uuid import UUID, uuid4
import logging

from sqlalchemy import func, inspect
from sqlalchemy.orm import make_transient_to_detached
from sqlalchemy.orm.attributes import flag_modified
from sqlmodel import Session, select

from core.exceptions import TopicAlreadyTrackedError
from models import Topic, TopicTag, Post, PagedList

logger = logging.getLogger(__name__)


class TopicRepository:
    """Reads and writes topics through the session of the current unit of work.

    Nothing here commits. Writes are flushed when the unit of work commits.
    """

    def __init__(self, session: Session):
        self.session = session

    def _sticky_first(self, query):
        return query.order_by(Topic.is_sticky.desc(), Topic.create_date.desc())

    def _paged(self, query, page_index: int, page_size: int, amount_to_take: int) -> PagedList[Topic]:
        results = self.session.exec(
            query.offset((page_index - 1) * page_size).limit(page_size)
        ).all()

        # Only the top amount_to_take are ever displayed, and there might
        # not be that many on this page
        total = min(len(results), amount_to_take)

        return PagedList(results, page_index, page_size, total)

    def get_all(self) -> List[Topic]:
        return list(self.session.exec(select(Topic)).all())

    def get_highest_viewed_topics(self, amount_to_take: int) -> List[Topic]:
        query = select(Topic).order_by(Topic.views.desc()).limit(amount_to_take)
        return list(self.session.exec(query).all())

    def add(self, topic: Topic) -> Topic:
        topic.id = uuid4()
        self.session.add(topic)
        logger.debug(f"Topic {topic.id} registered for insert")
        return topic

    def get(self, topic_id: UUID) -> Optional[Topic]:
        return self.session.exec(select(Topic).where(Topic.id == topic_id)).first()

    def delete(self, topic: Topic):
        self.session.delete(topic)
        logger.debug(f"Topic {topic.id} registered for delete")

    def update(self, topic: Topic) -> Topic:
        """Attach a topic loaded outside this unit of work as modified.

        Topics already tracked by the session save on commit, so calling
        update for one of them is a mistake and raises. Every column is
        written on flush; a topic with no stored row fails the flush with
        StaleDataError instead of being inserted.
        """
        key = self.session.identity_key(Topic, topic.id)
        pending = any(
            isinstance(obj, Topic) and obj.id == topic.id for obj in self.session.new
        )
        if key in self.session.identity_map or pending:
            raise TopicAlreadyTrackedError(topic.id)

        state = inspect(topic)
        if state.transient:
            make_transient_to_detached(topic)
        self.session.add(topic)

        for attr in state.mapper.column_attrs:
            if attr.key in state.dict and not any(column.primary_key for column in attr.columns):
                flag_modified(topic, attr.key)
        logger.debug(f"Topic {topic.id} registered for update")
        return topic

    def get_recent_topics(self, page_index: int, page_size: int, amount_to_take: int) -> PagedList[Topic]:
        query = select(Topic).order_by(Topic.create_date.desc())
        return self._paged(query, page_index, page_size, amount_to_take)

    def get_recent_rss_topics(self, amount_to_take: int) -> List[Topic]:
        query = select(Topic).order_by(Topic.create_date.desc()).limit(amount_to_take)
        return list(self.session.exec(query).all())

    def get_topics_by_user(self, member_id: UUID) -> List[Topic]:
        return list(self.session.exec(select(Topic).where(Topic.member_id == member_id)).all())

    def get_all_topics_by_category(self, category_id: UUID) -> List[Topic]:
        return list(self.session.exec(select(Topic).where(Topic.category_id == category_id)).all())

    def get_paged_topics_by_category(
        self, page_index: int, page_size: int, amount_to_take: int, category_id: UUID
    ) -> PagedList[Topic]:
        query = self._sticky_first(select(Topic).where(Topic.category_id == category_id))
        return self._paged(query, page_index, page_size, amount_to_take)

    def get_paged_topics_all(self, page_index: int, page_size: int, amount_to_take: int) -> PagedList[Topic]:
        return self._paged(self._sticky_first(select(Topic)), page_index, page_size, amount_to_take)

    def get_rss_topics_by_category(self, amount_to_take: int, category_id: UUID) -> List[Topic]:
        query = (
            select(Topic)
            .where(Topic.category_id == category_id)
            .order_by(Topic.create_date.desc())
            .limit(amount_to_take)
        )
        return list(self.session.exec(query).all())

    def get_paged_topics_by_tag(
        self, page_index: int, page_size: int, amount_to_take: int, tag: str
    ) -> PagedList[Topic]:
        # Tags are stored lowercased
        label = tag.strip().lower()
        query = self._sticky_first(select(Topic).where(Topic.tags.any(TopicTag.tag == label)))
        return self._paged(query, page_index, page_size, amount_to_take)

    def get_topic_by_slug(self, slug: str) -> Optional[Topic]:
        # Raises MultipleResultsFound if the slug is not unique
        return self.session.exec(select(Topic).where(Topic.slug == slug)).one_or_none()

    def get_topic_by_slug_like(self, slug: str) -> List[Topic]:
        query = select(Topic).where(Topic.slug.contains(slug, autoescape=True))
        return list(self.session.exec(query).all())

    def topic_count(self) -> int:
        return self.session.exec(select(func.count()).select_from(Topic)).one()

    def get_solved_topics_by_member(self, member_id: UUID) -> List[Topic]:
        """Topics started by the member that have a post marked as the solution"""
        query = (
            select(Topic)
            .where(Topic.member_id == member_id)
            .where(Topic.posts.any(Post.is_solution == True))  # noqa: E712
        )
        return list(self.session.exec(query).all())
