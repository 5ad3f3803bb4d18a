# 生成式 AI 客户端
from .client import GenAIClient
from .exceptions import (
    GenAIError,
    GenAIConfigError,
    GenAIBlockedError,
    GenAIResponseError,
)

__all__ = [
    "GenAIClient",
    "GenAIError",
    "GenAIConfigError",
    "GenAIBlockedError",
    "GenAIResponseError",
]
