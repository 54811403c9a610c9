from sqlmodel import Field, SQLModel, Relationship
from datetime import datetime, timezone
from typing import List, TYPE_CHECKING
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from .post import Post
    from .topic import Topic


class Member(SQLModel, table=True):
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(index=True, unique=True)
    email: str = Field(index=True)
    create_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    topics: List["Topic"] = Relationship(back_populates="user")
    posts: List["Post"] = Relationship(back_populates="user")
