"""
统一响应格式
"""
from pydantic import BaseModel, Field
from typing import TypeVar, Generic, Optional, Any
from datetime import datetime
import uuid

import structlog

T = TypeVar("T")


def current_request_id() -> str:
    """当前请求 ID（由日志中间件绑定），不存在时新生成"""
    request_id = structlog.contextvars.get_contextvars().get("request_id")
    return request_id or f"req_{uuid.uuid4().hex[:12]}"


def _timestamp() -> str:
    return datetime.utcnow().isoformat() + "Z"


class ErrorDetail(BaseModel):
    """错误详情"""
    type: str = Field(..., description="错误类型")
    detail: str = Field(..., description="错误详细说明")
    field: Optional[str] = Field(None, description="相关字段")


class APIResponse(BaseModel, Generic[T]):
    """
    统一 API 响应格式

    成功响应:
    {
        "success": true,
        "code": 200,
        "message": "操作成功",
        "data": { ... },
        "timestamp": "2026-10-17T10:00:00Z",
        "request_id": "req_abc123"
    }

    错误响应:
    {
        "success": false,
        "code": 42900,
        "message": "The service is currently experiencing high demand. ...",
        "error": { ... },
        "timestamp": "2026-10-17T10:00:00Z",
        "request_id": "req_abc123"
    }
    """
    success: bool = Field(..., description="请求是否成功")
    code: int = Field(..., description="响应码")
    message: str = Field(..., description="响应消息")
    data: Optional[T] = Field(None, description="响应数据")
    error: Optional[ErrorDetail] = Field(None, description="错误详情")
    timestamp: str = Field(default_factory=_timestamp, description="响应时间")
    request_id: str = Field(default_factory=current_request_id, description="请求 ID")


def success_response(
    data: Any = None,
    message: str = "操作成功",
    code: int = 200,
) -> dict:
    """构建成功响应"""
    return {
        "success": True,
        "code": code,
        "message": message,
        "data": data,
        "timestamp": _timestamp(),
        "request_id": current_request_id(),
    }


def error_response(
    message: str,
    code: int,
    error_type: str = "Error",
    detail: str = "",
    field: Optional[str] = None,
) -> dict:
    """构建错误响应"""
    return {
        "success": False,
        "code": code,
        "message": message,
        "error": {
            "type": error_type,
            "detail": detail,
            "field": field,
        },
        "timestamp": _timestamp(),
        "request_id": current_request_id(),
    }
