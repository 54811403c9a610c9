from sqlmodel import Field, SQLModel, Relationship
from datetime import datetime, timezone
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from .member import Member
    from .topic import Topic


class PostBase(SQLModel):
    post_content: str


class Post(PostBase, table=True):
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    date_created: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    is_solution: bool = Field(default=False)
    is_topic_starter: bool = Field(default=False)

    topic_id: UUID = Field(foreign_key="topic.id", index=True, ondelete="CASCADE")
    member_id: UUID = Field(foreign_key="member.id", index=True)

    # Relationships
    topic: "Topic" = Relationship(back_populates="posts")
    user: "Member" = Relationship(back_populates="posts")
