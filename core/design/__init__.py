# 材料设计：需求模型、提示词与失败分类
from .models import (
    UserRequirements,
    MaterialRecord,
    Conductivity,
    Elasticity,
    Biodegradability,
    property_options,
)
from .prompt import build_prompt, RESPONSE_SCHEMA
from .failures import FailureCategory, FailureClassification, classify_failure

__all__ = [
    "UserRequirements",
    "MaterialRecord",
    "Conductivity",
    "Elasticity",
    "Biodegradability",
    "property_options",
    "build_prompt",
    "RESPONSE_SCHEMA",
    "FailureCategory",
    "FailureClassification",
    "classify_failure",
]
