"""
生成式 AI 调用异常

异常文本保留上游返回的状态码与错误信息，供界面层按文本分类。
"""
from typing import Optional, Dict, Any


class GenAIError(Exception):
    """
    生成式 AI 调用基础异常

    Attributes:
        status_code: HTTP 状态码（网络错误时为 None）
        details: 上游返回的原始错误体
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, status_code={self.status_code!r})"


class GenAIConfigError(GenAIError):
    """密钥缺失等配置错误"""
    pass


class GenAIBlockedError(GenAIError):
    """
    请求被安全策略拦截

    Attributes:
        reason: 拦截原因（如 SAFETY）
    """

    def __init__(self, reason: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Request blocked by the model: {reason}", details=details)
        self.reason = reason


class GenAIResponseError(GenAIError):
    """响应内容无法解析"""
    pass
