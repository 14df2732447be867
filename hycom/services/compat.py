from typing import List, Optional

from hycom.core.config import has_config_changed, reload_configs
from hycom.models.hycom_entities import Author, ExploreSortParameter, Post, SiteInformation, SortParameter, Tag
from hycom.services.hycom_client import HycomClient

# 兼容接口：失败一律返回 None，不区分失败原因

_default_client: Optional[HycomClient] = None
_built_from_config = False


def get_default_client() -> HycomClient:
    """按配置文件懒加载共享客户端，配置文件变化后重新创建"""
    global _default_client, _built_from_config
    if _built_from_config and has_config_changed():
        reload_configs()
        _default_client = None

    if _default_client is None:
        _default_client = HycomClient()
        _built_from_config = True
    return _default_client


def set_default_client(client: Optional[HycomClient]) -> None:
    """替换共享客户端；传入 None 则下次调用时按配置重新创建"""
    global _default_client, _built_from_config
    _default_client = client
    _built_from_config = False


async def top_authors(limit: int = 10) -> Optional[List[Author]]:
    result = await get_default_client().get_top_authors(limit)
    return result.unwrap_or_none()


async def author_posts(display_name: str, limit: int = 10, sort: SortParameter = "newest") -> Optional[List[Post]]:
    result = await get_default_client().get_author_posts(display_name, limit, sort)
    return result.unwrap_or_none()


async def get_tags(limit: int = 20) -> Optional[List[Tag]]:
    result = await get_default_client().get_tags(limit)
    return result.unwrap_or_none()


async def explore(
        search: str = "",
        page: int = 1,
        limit: int = 12,
        sort: ExploreSortParameter = "recommended",
        tag: str = ""
) -> Optional[List[Post]]:
    result = await get_default_client().explore(search, page, limit, sort, tag)
    return result.unwrap_or_none()


async def site_information() -> Optional[SiteInformation]:
    result = await get_default_client().get_site_information()
    return result.unwrap_or_none()


async def last_posts(limit: int = 10) -> Optional[List[Post]]:
    result = await get_default_client().get_last_posts(limit)
    return result.unwrap_or_none()


async def search_posts(query: str, limit: int = 10, page: int = 1) -> Optional[List[Post]]:
    result = await get_default_client().search_posts(query, limit, page)
    return result.unwrap_or_none()


async def qr_code(url: str) -> Optional[bytes]:
    """生成二维码，返回 PNG 字节或 None"""
    result = await get_default_client().get_qr_code(url)
    return result.unwrap_or_none()
