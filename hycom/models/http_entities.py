from enum import Enum
from typing import Generic, Optional, Dict, Any, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ErrorKind(str, Enum):
    """失败类别"""
    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    DECODE = "decode"
    INVALID_ARGUMENT = "invalid_argument"
    UNEXPECTED = "unexpected"


class FetchResult(BaseModel):
    """HTTP请求的结果"""
    status_code: Optional[int] = None
    url: Optional[str] = None
    content: Optional[Any] = None
    content_type: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    headers: Optional[Dict[str, str]] = None
    elapsed_time: Optional[float] = None


class ApiResult(BaseModel, Generic[T]):
    """单次接口调用的结果：成功值或带类别的失败"""
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    status_code: Optional[int] = None
    elapsed_time: Optional[float] = None

    @classmethod
    def success_response(cls, data: T, fetch_result: Optional[FetchResult] = None) -> 'ApiResult[T]':
        """创建成功响应"""
        return cls(
            success=True,
            data=data,
            status_code=fetch_result.status_code if fetch_result else None,
            elapsed_time=fetch_result.elapsed_time if fetch_result else None
        )

    @classmethod
    def error_response(cls, error: str, error_kind: ErrorKind,
                       fetch_result: Optional[FetchResult] = None) -> 'ApiResult[T]':
        """创建错误响应"""
        return cls(
            success=False,
            data=None,
            error=error,
            error_kind=error_kind,
            status_code=fetch_result.status_code if fetch_result else None,
            elapsed_time=fetch_result.elapsed_time if fetch_result else None
        )

    @classmethod
    def from_failed_fetch(cls, fetch_result: FetchResult) -> 'ApiResult[T]':
        return cls.error_response(
            error=fetch_result.error or "未知错误",
            error_kind=fetch_result.error_kind or ErrorKind.UNEXPECTED,
            fetch_result=fetch_result
        )

    def unwrap_or_none(self) -> Optional[T]:
        """兼容模式：失败一律返回 None"""
        return self.data if self.success else None
