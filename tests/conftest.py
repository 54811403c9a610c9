from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from core.config import get_settings
from core.unit_of_work import UnitOfWorkManager
from dependencies import get_unit_of_work_manager, topic_flood_control
from main import app
from models import Category, Member, Post, Topic
from services.slugs import create_url_friendly
from services.topic_tag import TopicTagService

DAY_ZERO = datetime(2024, 1, 1, tzinfo=timezone.utc)

@pytest.fixture(scope="session")
def settings():
    return get_settings()

@pytest.fixture
def test_db_engine(settings):
    engine = create_engine(
        settings.TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()

@pytest.fixture
def db_session(test_db_engine):
    with Session(test_db_engine) as session:
        yield session

@pytest.fixture
def unit_of_work_manager(test_db_engine):
    return UnitOfWorkManager(test_db_engine)

@pytest.fixture
def client(unit_of_work_manager):
    app.dependency_overrides[get_unit_of_work_manager] = lambda: unit_of_work_manager
    app.dependency_overrides[topic_flood_control] = lambda: None
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()

@pytest.fixture
def category(db_session):
    category = Category(name="General Discussion", slug="general-discussion")
    db_session.add(category)
    db_session.commit()
    return category

@pytest.fixture
def member(db_session):
    member = Member(username="testuser", email="test@example.com")
    db_session.add(member)
    db_session.commit()
    return member

@pytest.fixture
def make_topic(db_session, category, member):
    """Insert and commit a topic created `day` days after DAY_ZERO"""
    def _make_topic(
        name,
        day=0,
        views=0,
        is_sticky=False,
        tags=(),
        solution=False,
        slug=None,
        category_id=None,
        member_id=None,
    ):
        topic = Topic(
            name=name,
            slug=slug or create_url_friendly(name),
            create_date=DAY_ZERO + timedelta(days=day),
            views=views,
            is_sticky=is_sticky,
            category_id=category_id or category.id,
            member_id=member_id or member.id,
        )
        topic.tags = TopicTagService(db_session).get_or_create(list(tags))
        topic.posts.append(Post(
            post_content=f"{name} starter",
            is_topic_starter=True,
            topic_id=topic.id,
            member_id=topic.member_id,
        ))
        if solution:
            topic.posts.append(Post(
                post_content="This fixed it",
                is_solution=True,
                topic_id=topic.id,
                member_id=topic.member_id,
            ))
        db_session.add(topic)
        db_session.commit()
        return topic
    return _make_topic
