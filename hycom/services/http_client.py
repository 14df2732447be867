import json
import time
import httpx
from typing import Dict, Any, Optional

from hycom.models.http_entities import ErrorKind, FetchResult
from hycom.utils.logger_util import logger

DEFAULT_TIMEOUT = 30


async def make_request(
        url: str,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None
) -> FetchResult:
    """
    发送HTTP GET请求并返回响应内容，任何异常都转换为带 error 的结果

    Args:
        url: 请求的URL
        params: 查询参数，按字典顺序编码（值为空字符串时原样保留 key=）
        timeout: 请求超时时间（秒），默认为30秒
        client: 外部传入的 httpx.AsyncClient，不传则每次请求新建

    Returns:
        FetchResult: 包含响应信息的实体，elapsed_time 为本次请求的耗时（秒）
    """
    timeout_value = DEFAULT_TIMEOUT if timeout is None else timeout
    started = time.perf_counter()

    def elapsed() -> float:
        return time.perf_counter() - started

    try:
        if client is not None:
            response = await client.get(url, params=params, timeout=timeout_value, follow_redirects=True)
        else:
            async with httpx.AsyncClient(timeout=timeout_value) as own_client:
                response = await own_client.get(url, params=params, follow_redirects=True)

        elapsed_time = elapsed()
        logger.debug(f"GET {response.request.url} -> {response.status_code} ({elapsed_time:.3f}s)")

        # 确保响应成功
        response.raise_for_status()

        # 尝试解析为JSON
        try:
            content = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"响应不是有效的 JSON: {url}")
            return FetchResult(
                status_code=response.status_code,
                content_type=response.headers.get("content-type", ""),
                url=str(response.request.url),
                headers=dict(response.headers),
                content=response.text,
                error=f"JSON解析失败: {str(e)}",
                error_kind=ErrorKind.DECODE,
                elapsed_time=elapsed_time
            )

        return FetchResult(
            status_code=response.status_code,
            content_type=response.headers.get("content-type", ""),
            url=str(response.request.url),
            headers=dict(response.headers),
            content=content,
            elapsed_time=elapsed_time
        )

    except httpx.HTTPStatusError as e:
        logger.warning(f"HTTP错误: {e.response.status_code} {url}")
        return FetchResult(
            status_code=e.response.status_code,
            content_type=e.response.headers.get("content-type", ""),
            url=url,
            headers=dict(e.response.headers),
            content=e.response.text,
            error=f"HTTP错误: {e.response.status_code}",
            error_kind=ErrorKind.HTTP_STATUS,
            elapsed_time=elapsed()
        )

    except httpx.TimeoutException as e:
        logger.warning(f"请求超时: {url}")
        return FetchResult(
            url=url,
            error=f"请求超时: {str(e)}",
            error_kind=ErrorKind.TIMEOUT,
            elapsed_time=elapsed()
        )

    except httpx.RequestError as e:
        logger.warning(f"请求错误: {url} {e}")
        return FetchResult(
            url=url,
            error=f"请求错误: {str(e)}",
            error_kind=ErrorKind.TRANSPORT,
            elapsed_time=elapsed()
        )

    except Exception as e:
        logger.exception(f"未知错误: {url}")
        return FetchResult(
            url=url,
            error=f"未知错误: {str(e)}",
            error_kind=ErrorKind.UNEXPECTED,
            elapsed_time=elapsed()
        )
