"""
全局错误处理

错误码、接口层异常及其到统一响应格式的转换
"""
from fastapi import Request
from fastapi.responses import JSONResponse
import structlog

from api.schemas.response import error_response
from core.design import FailureCategory, FailureClassification, classify_failure

logger = structlog.get_logger(__name__)


class ErrorCode:
    """错误码定义"""
    # 通用错误 (40xxx)
    BAD_REQUEST = 40000
    STRUCTURE_FORMAT_INVALID = 40001
    PARAMETER_INVALID = 40002
    EXPORT_REFUSED = 40003
    STRUCTURE_TOO_LARGE = 40004

    # 设计请求错误 (42xxx)
    DESIGN_BLOCKED = 42201
    DESIGN_MALFORMED_REQUEST = 42202

    # 上游限流 (42900)
    DESIGN_RATE_LIMITED = 42900

    # 服务器错误 (50xxx)
    INTERNAL_ERROR = 50000
    DESIGN_FAILED = 50200
    GENAI_NOT_CONFIGURED = 50300


class StructureFormatError(Exception):
    """结构格式错误"""
    def __init__(self, message: str, code: int = ErrorCode.STRUCTURE_FORMAT_INVALID):
        self.code = code
        super().__init__(message)


class DesignFailedError(Exception):
    """设计请求失败（携带分类结果）"""
    def __init__(self, classification: FailureClassification):
        self.classification = classification
        super().__init__(classification.message)

    @classmethod
    def from_exception(cls, exc: Exception) -> "DesignFailedError":
        return cls(classify_failure(exc))


# 失败类别 -> (HTTP 状态码, 错误码)
DESIGN_FAILURE_STATUS = {
    FailureCategory.SAFETY: (422, ErrorCode.DESIGN_BLOCKED),
    FailureCategory.CREDENTIAL: (503, ErrorCode.GENAI_NOT_CONFIGURED),
    FailureCategory.RATE_LIMIT: (429, ErrorCode.DESIGN_RATE_LIMITED),
    FailureCategory.MALFORMED_REQUEST: (400, ErrorCode.DESIGN_MALFORMED_REQUEST),
    FailureCategory.GENERIC: (502, ErrorCode.DESIGN_FAILED),
}


async def structure_format_error_handler(request: Request, exc: StructureFormatError):
    """结构格式错误异常处理"""
    logger.warning("structure_format_error", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=400,
        content=error_response(
            message="结构格式错误",
            code=exc.code,
            error_type="StructureFormatError",
            detail=str(exc),
        ),
    )


async def design_failed_handler(request: Request, exc: DesignFailedError):
    """设计请求失败异常处理"""
    classification = exc.classification
    status_code, code = DESIGN_FAILURE_STATUS[classification.category]

    logger.warning(
        "design_failed",
        path=request.url.path,
        category=classification.category.value,
        detail=classification.detail,
    )
    return JSONResponse(
        status_code=status_code,
        content=error_response(
            message=classification.message,
            code=code,
            error_type=classification.category.value,
            detail=classification.detail,
        ),
    )
