import time
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from hycom.core.config import (
    LAST_POSTS_STRATEGIES,
    get_augment_site_info,
    get_base_url,
    get_last_posts_strategy,
    get_timeout,
)
from hycom.models.http_entities import ApiResult, ErrorKind
from hycom.models.hycom_entities import (
    EXPLORE_SORT_VALUES,
    SORT_VALUES,
    ApiEnvelope,
    Author,
    ExploreSortParameter,
    Post,
    QrCodePayload,
    SiteInformation,
    SiteStatistics,
    SortParameter,
    Tag,
)
from hycom.services.http_client import make_request
from hycom.utils.logger_util import logger
from hycom.utils.qr_code import decode_data_uri


class HycomClient:
    """
    HyCom 内容平台接口客户端。

    每个方法对应一个远程接口，只发送一次 GET（附加模式的站点信息为两次），
    结果统一包装为 ApiResult，不会向调用方抛出异常。
    """

    TOP_AUTHORS_PATH = "/api/top-authors"
    AUTHOR_POSTS_PATH = "/api/author-posts"
    TAGS_PATH = "/api/tags"
    EXPLORE_PATH = "/api/explore"
    SITE_INFO_PATH = "/api/site-info"
    LAST_POSTS_PATH = "/api/last-posts"
    SEARCH_POSTS_PATH = "/api/search-posts"
    QR_CODE_PATH = "/api/qr-code"

    def __init__(
            self,
            base_url: Optional[str] = None,
            timeout: Optional[float] = None,
            augment_site_info: Optional[bool] = None,
            last_posts_strategy: Optional[str] = None,
            http_client: Optional[httpx.AsyncClient] = None
    ):
        self.base_url = (base_url or get_base_url()).rstrip("/")
        self.timeout = get_timeout() if timeout is None else timeout
        self.augment_site_info = get_augment_site_info() if augment_site_info is None else augment_site_info
        self.last_posts_strategy = last_posts_strategy or get_last_posts_strategy()
        self.http_client = http_client

        if self.last_posts_strategy not in LAST_POSTS_STRATEGIES:
            raise ValueError(f"未知的 last_posts_strategy: {self.last_posts_strategy}")

    # ---------- 私有工具 ----------
    async def _get(self, path: str, params: Optional[Dict[str, Any]], model: Any) -> ApiResult:
        """发送请求并把 envelope 中的 data 解析为指定类型"""
        fetch_result = await make_request(
            url=self.base_url + path,
            params=params,
            timeout=self.timeout,
            client=self.http_client
        )
        if fetch_result.error:
            return ApiResult.from_failed_fetch(fetch_result)

        try:
            envelope = ApiEnvelope[model].model_validate(fetch_result.content)
        except ValidationError as e:
            logger.warning(f"响应结构不符合预期: {path} ({e.error_count()} 个错误)")
            return ApiResult.error_response(
                error=f"响应结构不符合预期: {e}",
                error_kind=ErrorKind.DECODE,
                fetch_result=fetch_result
            )

        return ApiResult.success_response(envelope.data, fetch_result)

    @staticmethod
    def _invalid(message: str) -> ApiResult:
        logger.warning(message)
        return ApiResult.error_response(error=message, error_kind=ErrorKind.INVALID_ARGUMENT)

    # ---------- 接口 ----------
    async def get_top_authors(self, limit: int = 10) -> ApiResult[List[Author]]:
        """
        按总浏览量返回排名靠前的作者

        Args:
            limit: 返回的作者数量（服务端限制 1-50）
        """
        return await self._get(self.TOP_AUTHORS_PATH, {"limit": limit}, List[Author])

    async def get_author_posts(
            self,
            display_name: str,
            limit: int = 10,
            sort: SortParameter = "newest"
    ) -> ApiResult[List[Post]]:
        """
        返回指定作者已发布的文章

        Args:
            display_name: 作者显示名与 profile ID（格式：name-code），作为单个路径段编码
            limit: 返回的文章数量（1-50）
            sort: 排序方式（newest, most_viewed）
        """
        if not display_name:
            return self._invalid("display_name 不能为空")
        if sort not in SORT_VALUES:
            return self._invalid(f"不支持的排序方式: {sort}")

        path = f"{self.AUTHOR_POSTS_PATH}/{quote(display_name, safe='')}"
        return await self._get(path, {"limit": limit, "sort": sort}, List[Post])

    async def get_tags(self, limit: int = 20) -> ApiResult[List[Tag]]:
        """返回标签及其文章数量（limit 1-100）"""
        return await self._get(self.TAGS_PATH, {"limit": limit}, List[Tag])

    async def explore(
            self,
            search: str = "",
            page: int = 1,
            limit: int = 12,
            sort: ExploreSortParameter = "recommended",
            tag: str = ""
    ) -> ApiResult[List[Post]]:
        """
        分页浏览已发布文章，支持搜索、排序和按标签筛选

        五个参数总是全部发送，空字符串也以 search= / tag= 的形式保留。

        Args:
            search: 标题、标签或作者的搜索词
            page: 页码
            limit: 每页文章数（1-50）
            sort: 排序方式（recommended, newest, most_viewed）
            tag: 标签 slug
        """
        if sort not in EXPLORE_SORT_VALUES:
            return self._invalid(f"不支持的排序方式: {sort}")

        params = {"search": search, "page": page, "limit": limit, "sort": sort, "tag": tag}
        return await self._get(self.EXPLORE_PATH, params, List[Post])

    async def get_site_information(self) -> ApiResult[SiteInformation]:
        """
        返回站点统计信息

        附加模式下额外测量本次请求的往返延迟（毫秒），并再请求一次最新文章填入 last_post。
        """
        started = time.perf_counter()
        result = await self._get(self.SITE_INFO_PATH, None, SiteStatistics)
        ping = max(0, int(round((time.perf_counter() - started) * 1000)))

        if not result.success:
            return result

        stats: SiteStatistics = result.data
        if not self.augment_site_info:
            return result.model_copy(update={"data": SiteInformation(**stats.model_dump())})

        last_post = None
        last_posts = await self.get_last_posts(limit=1)
        if last_posts.success and last_posts.data:
            last_post = last_posts.data[0]
        else:
            logger.warning(f"获取最新文章失败，last_post 置空: {last_posts.error}")

        info = SiteInformation(**stats.model_dump(), last_post=last_post, ping=ping)
        return result.model_copy(update={"data": info})

    async def get_last_posts(self, limit: int = 10) -> ApiResult[List[Post]]:
        """返回最新发布的文章（limit 1-50）"""
        if self.last_posts_strategy == "explore":
            return await self.explore(page=1, limit=limit, sort="newest")
        return await self._get(self.LAST_POSTS_PATH, {"limit": limit}, List[Post])

    async def search_posts(self, query: str, limit: int = 10, page: int = 1) -> ApiResult[List[Post]]:
        """
        按关键词搜索已发布文章

        Args:
            query: 标题、标签或作者的搜索词，必填
            limit: 每页文章数（1-50）
            page: 页码
        """
        if not query or not query.strip():
            return self._invalid("搜索词不能为空")

        return await self._get(self.SEARCH_POSTS_PATH, {"q": query, "limit": limit, "page": page}, List[Post])

    async def get_qr_code(self, url: str) -> ApiResult[bytes]:
        """生成指定 URL 的二维码，返回 PNG 原始字节"""
        if not url:
            return self._invalid("url 不能为空")

        result = await self._get(self.QR_CODE_PATH, {"url": url}, QrCodePayload)
        if not result.success:
            return result

        try:
            raw = decode_data_uri(result.data.qr_code)
        except ValueError as e:
            logger.warning(f"二维码 base64 解码失败: {e}")
            return result.model_copy(update={
                "success": False,
                "data": None,
                "error": f"二维码解码失败: {e}",
                "error_kind": ErrorKind.DECODE
            })

        return result.model_copy(update={"data": raw})
