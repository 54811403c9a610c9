from sqlmodel import Field, SQLModel, Relationship
from datetime import datetime, timezone
from typing import List, Optional, TYPE_CHECKING
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from .topic import Topic


class Category(SQLModel, table=True):
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str
    slug: str = Field(index=True, unique=True)
    description: Optional[str] = Field(default=None)
    sort_order: int = Field(default=0)
    create_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    topics: List["Topic"] = Relationship(back_populates="category")
