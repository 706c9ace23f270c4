"""HTTP exception handlers.

提供统一的异常处理机制，将领域异常转换为标准列表响应。
各模块的异常类通过定义 http_status_code 和 error_code 类属性来自定义响应。
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from src.core.domain.exceptions import DomainException
from src.core.interfaces.http.response import ListResponse


async def domain_exception_handler(
    _request: Request, exc: DomainException
) -> JSONResponse:
    """Handle domain exceptions.

    通过读取异常类的 http_status_code 和 error_code 类属性来确定响应。
    """
    status_code = getattr(exc, "http_status_code", 400)
    error_code = getattr(exc, "error_code", "DOMAIN_ERROR")
    logger.warning(f"Domain error {error_code}: {exc.message}")

    return JSONResponse(
        status_code=status_code,
        content=ListResponse.error(exc.message, code=status_code).to_content(),
    )


async def global_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ListResponse.error(
            f"获取视频失败: {exc}",
            code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        ).to_content(),
    )
