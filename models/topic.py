from sqlmodel import SQLModel, Field, Relationship
from datetime import datetime, timezone
from typing import List, Optional, TYPE_CHECKING
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from .category import Category
    from .member import Member
    from .post import Post
    from .tag import TopicTag


class TopicTagLink(SQLModel, table=True):
    topic_id: UUID = Field(foreign_key="topic.id", primary_key=True, ondelete="CASCADE")
    topic_tag_id: UUID = Field(foreign_key="topictag.id", primary_key=True, ondelete="CASCADE")


class TopicBase(SQLModel):
    name: str
    is_sticky: bool = Field(default=False)
    is_locked: bool = Field(default=False)


class Topic(TopicBase, table=True):
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    slug: str = Field(index=True, unique=True)
    create_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)
    views: int = Field(default=0)
    solved: bool = Field(default=False)

    category_id: UUID = Field(foreign_key="category.id", index=True)
    member_id: UUID = Field(foreign_key="member.id", index=True)

    # Relationships
    category: "Category" = Relationship(back_populates="topics")
    user: "Member" = Relationship(back_populates="topics")
    posts: List["Post"] = Relationship(
        back_populates="topic",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "Post.date_created",
        }
    )
    tags: List["TopicTag"] = Relationship(back_populates="topics", link_model=TopicTagLink)


class TopicPublic(TopicBase):
    id: UUID
    slug: str
    create_date: datetime
    views: int
    solved: bool
    category_id: UUID
    member_id: UUID
    tags: List[str] = []


class TopicCreate(TopicBase):
    category_id: UUID
    member_id: UUID
    post_content: str
    tags: List[str] = []


class TopicUpdate(SQLModel):
    name: Optional[str] = None
    is_sticky: Optional[bool] = None
    is_locked: Optional[bool] = None
    solved: Optional[bool] = None


class TopicPage(SQLModel):
    """A page of topics as shown by the listing endpoints"""
    topics: List[TopicPublic]
    page_index: int
    page_size: int
    total_count: int
    total_pages: int
    has_previous_page: bool
    has_next_page: bool
