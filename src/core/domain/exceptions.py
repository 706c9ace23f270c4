"""Domain exceptions.

异常类通过 http_status_code / error_code 类属性声明 HTTP 映射，
由 src.core.interfaces.http.exceptions 统一转换为 {code, message, list} 响应。
"""

from fastapi import status


class DomainException(Exception):
    """Base class for errors raised by domain and application code."""

    http_status_code: int = status.HTTP_400_BAD_REQUEST
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str = "A domain error occurred"):
        self.message = message
        super().__init__(message)


class ConfigurationError(DomainException):
    """外部配置（如视频源目录）不可用。"""

    http_status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "CONFIGURATION_ERROR"
