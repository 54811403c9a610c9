from .topic import Topic, TopicTagLink, TopicPublic, TopicCreate, TopicUpdate, TopicPage
from .post import Post
from .category import Category
from .member import Member
from .tag import TopicTag, PopularTag, PopularTagViewModel
from .paging import PagedList
from .response import BasicResponse, CountResponse

__all__ = [
    "Topic", "TopicTagLink", "TopicPublic", "TopicCreate", "TopicUpdate", "TopicPage",
    "Post",
    "Category",
    "Member",
    "TopicTag", "PopularTag", "PopularTagViewModel",
    "PagedList",
    "BasicResponse", "CountResponse",
]
