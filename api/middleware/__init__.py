# API 中间件
from .logging import LoggingMiddleware
from .error_handler import (
    ErrorCode,
    StructureFormatError,
    DesignFailedError,
    structure_format_error_handler,
    design_failed_handler,
)

__all__ = [
    "LoggingMiddleware",
    "ErrorCode",
    "StructureFormatError",
    "DesignFailedError",
    "structure_format_error_handler",
    "design_failed_handler",
]
