from sqlmodel import SQLModel, Field, Relationship
from typing import List, TYPE_CHECKING
from uuid import UUID, uuid4

from .topic import TopicTagLink

if TYPE_CHECKING:
    from .topic import Topic


class TopicTag(SQLModel, table=True):
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tag: str = Field(index=True, unique=True)
    slug: str = Field(index=True)

    topics: List["Topic"] = Relationship(back_populates="tags", link_model=TopicTagLink)


class PopularTag(SQLModel):
    tag: str
    slug: str
    count: int


class PopularTagViewModel(SQLModel):
    popular_tags: List[PopularTag]
