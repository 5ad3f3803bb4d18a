# API Pydantic 数据模型
from .response import APIResponse
from .structure import (
    CoordinateBlockRequest,
    ExportRequest,
    ParseResponse,
    ValidateResponse,
    RenderResponse,
)
from .design import DesignResponse, MaterialInfo, OptionsResponse

__all__ = [
    "APIResponse",
    "CoordinateBlockRequest",
    "ExportRequest",
    "ParseResponse",
    "ValidateResponse",
    "RenderResponse",
    "DesignResponse",
    "MaterialInfo",
    "OptionsResponse",
]
