"""
设计请求失败分类

按异常文本匹配用户可读提示，优先级固定：
安全拦截 > 凭证/配置 > 限流 > 请求格式 > 通用
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any


class FailureCategory(str, Enum):
    """失败类别"""
    SAFETY = "safety"
    CREDENTIAL = "credential"
    RATE_LIMIT = "rate_limit"
    MALFORMED_REQUEST = "malformed_request"
    GENERIC = "generic"


@dataclass(frozen=True)
class FailureClassification:
    category: FailureCategory
    message: str
    detail: str = ""


SAFETY_MESSAGE = "The request was blocked by the AI's safety filters. Please modify your input and try again."
CREDENTIAL_MESSAGE = "API configuration error. Please contact the administrator."
RATE_LIMIT_MESSAGE = "The service is currently experiencing high demand. Please try again in a few moments."
UNEXPECTED_MESSAGE = "An unexpected error occurred. Please try again."

_CREDENTIAL_MARKERS = ("API key not valid", "API_KEY_INVALID", "API_KEY environment variable")


def classify_failure(error: Any) -> FailureClassification:
    """
    将失败映射为唯一的用户提示

    Args:
        error: 捕获到的异常（非异常对象统一视为未知错误）
    """
    if not isinstance(error, Exception):
        return FailureClassification(FailureCategory.GENERIC, UNEXPECTED_MESSAGE)

    message = str(error)

    if "SAFETY" in message:
        return FailureClassification(FailureCategory.SAFETY, SAFETY_MESSAGE, message)

    if any(marker in message for marker in _CREDENTIAL_MARKERS):
        return FailureClassification(FailureCategory.CREDENTIAL, CREDENTIAL_MESSAGE, message)

    if "429" in message or "resource has been exhausted" in message.lower():
        return FailureClassification(FailureCategory.RATE_LIMIT, RATE_LIMIT_MESSAGE, message)

    if "400" in message:
        return FailureClassification(
            FailureCategory.MALFORMED_REQUEST,
            f"There was a problem with the request. The AI reported: {message}. Please check your inputs.",
            message,
        )

    return FailureClassification(FailureCategory.GENERIC, f"An API error occurred: {message}", message)
