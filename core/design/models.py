"""
材料设计数据模型

- UserRequirements: 用户提交的设计需求
- MaterialRecord: AI 返回的材料记录
"""
from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

NOT_REQUIRED = "Not Required"


class Conductivity(str, Enum):
    """导电性选项"""
    NOT_REQUIRED = NOT_REQUIRED
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    INSULATOR = "Insulator"


class Elasticity(str, Enum):
    """弹性选项"""
    NOT_REQUIRED = NOT_REQUIRED
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    RIGID = "Rigid"


class Biodegradability(str, Enum):
    """生物降解性选项"""
    NOT_REQUIRED = NOT_REQUIRED
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    NON_BIODEGRADABLE = "Non-biodegradable"


def property_options() -> Dict[str, List[str]]:
    """下拉字段可选值"""
    return {
        "conductivity": [o.value for o in Conductivity],
        "elasticity": [o.value for o in Elasticity],
        "biodegradability": [o.value for o in Biodegradability],
    }


class UserRequirements(BaseModel):
    """
    设计需求

    functionality 与 use_case 为必填项，其余为可选描述或下拉选项。
    同时接受 camelCase 字段名（useCase, regulatoryCompliance）。
    """
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True)

    functionality: str = Field(..., description="材料功能")
    use_case: str = Field(..., alias="useCase", description="预期用途")
    compatibility: str = Field(default="", description="兼容性要求")
    environment: str = Field(default="", description="使用环境")
    conductivity: Conductivity = Field(default=Conductivity.NOT_REQUIRED, description="导电性")
    elasticity: Elasticity = Field(default=Elasticity.NOT_REQUIRED, description="弹性 / 杨氏模量")
    biodegradability: Biodegradability = Field(default=Biodegradability.NOT_REQUIRED, description="生物降解性")
    regulatory_compliance: str = Field(default="", alias="regulatoryCompliance", description="法规与合规需求")

    @field_validator("functionality")
    @classmethod
    def validate_functionality(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Material Functionality is a required field.")
        return v

    @field_validator("use_case")
    @classmethod
    def validate_use_case(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Intended Use / Application is a required field.")
        return v


class MaterialRecord(BaseModel):
    """
    AI 返回的材料记录

    字段名与模型输出保持一致（camelCase），序列化时同样使用别名。
    """
    model_config = ConfigDict(populate_by_name=True)

    material_name: str = Field(..., alias="materialName", description="材料名称")
    description: str = Field(..., description="材料描述与可行性分析")
    xyz_coordinates: str = Field(..., alias="xyzCoordinates", description="XYZ 坐标块")
    synthesis_methodology: str = Field(..., alias="synthesisMethodology", description="合成方法")
    validation_summary: str = Field(..., alias="validationSummary", description="验证总结")

    @property
    def coordinate_block(self) -> str:
        return self.xyz_coordinates

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


REQUIRED_RECORD_FIELDS = (
    "materialName",
    "description",
    "xyzCoordinates",
    "synthesisMethodology",
    "validationSummary",
)
