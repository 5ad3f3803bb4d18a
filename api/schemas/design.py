"""
设计请求相关数据模型
"""
from pydantic import BaseModel, Field
from typing import Dict, List

from .structure import RenderResponse


class MaterialInfo(BaseModel):
    """材料记录"""
    materialName: str
    description: str
    xyzCoordinates: str
    synthesisMethodology: str
    validationSummary: str


class DesignResponse(BaseModel):
    """设计结果"""
    material: MaterialInfo = Field(..., description="AI 返回的材料记录")
    structure: RenderResponse = Field(..., description="结构预览")
    can_export: bool = Field(..., description="是否允许导出 .xyz")
    duration_ms: float = Field(..., description="处理耗时 (ms)")


class OptionsResponse(BaseModel):
    """下拉字段可选值"""
    options: Dict[str, List[str]]
