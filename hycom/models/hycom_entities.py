# hycom_entities.py
from typing import Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

SortParameter = Literal["newest", "most_viewed"]
ExploreSortParameter = Literal["recommended", "newest", "most_viewed"]

SORT_VALUES = ("newest", "most_viewed")
EXPLORE_SORT_VALUES = ("recommended",) + SORT_VALUES


class HycomEntity(BaseModel):
    """远程服务返回的不可变实体"""
    model_config = ConfigDict(frozen=True)


class Author(HycomEntity):
    """作者"""
    display_name: str
    profile_id: str
    url: str
    article_count: int
    total_views: int
    profile_image: Optional[str] = None

    @property
    def author_key(self) -> str:
        """author-posts 接口使用的 name-code 复合标识"""
        return f"{self.display_name}-{self.profile_id}"


class Post(HycomEntity):
    """单篇文章"""
    url: str
    title: str
    summary: Optional[str] = None
    image: Optional[str] = None
    view_count: int
    like_count: int
    created_at: str
    tags: List[str] = Field(default_factory=list)
    reading_time: int


class Tag(HycomEntity):
    name: str
    slug: str
    post_count: int


class SiteStatistics(HycomEntity):
    """/api/site-info 返回的站点统计"""
    total_tags: int
    total_views: int
    total_posts: int
    total_authors: int


class SiteInformation(SiteStatistics):
    """站点信息，last_post 与 ping 仅在附加模式下填充"""
    last_post: Optional[Post] = None
    ping: Optional[int] = None


class QrCodePayload(HycomEntity):
    qr_code: str


class ApiEnvelope(BaseModel, Generic[T]):
    """所有 JSON 响应的 {success, data} 外壳"""
    success: bool
    data: T
