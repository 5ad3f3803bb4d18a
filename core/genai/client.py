"""
Gemini REST 客户端

通过 generateContent 接口获取结构化 JSON 输出
"""
from typing import Optional, Dict, Any, List

import httpx
import structlog

from .exceptions import (
    GenAIError,
    GenAIConfigError,
    GenAIBlockedError,
    GenAIResponseError,
)

logger = structlog.get_logger(__name__)

MISSING_KEY_MESSAGE = "API_KEY environment variable not set"
BLOCKING_FINISH_REASONS = {"SAFETY", "PROHIBITED_CONTENT", "BLOCKLIST", "SPII"}


class GenAIClient:
    """
    Gemini 异步客户端

    Example:
        ```python
        async with GenAIClient(api_key="...") as client:
            text = await client.generate_json(prompt, schema)
        ```

    Args:
        api_key: API 密钥
        model: 模型名称
        base_url: REST API 根地址
        temperature: 采样温度
        timeout: 请求超时时间（秒）
        max_retries: 连接重试次数
        transport: 自定义 httpx 传输层（测试用）
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        temperature: float = 0.7,
        timeout: float = 120.0,
        max_retries: int = 2,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self.timeout = timeout

        headers = {
            "User-Agent": "MatForge/0.1.0",
            "Content-Type": "application/json",
        }
        if api_key:
            headers["x-goog-api-key"] = api_key

        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers=headers,
            transport=transport or httpx.AsyncHTTPTransport(retries=max_retries),
        )

    async def __aenter__(self) -> "GenAIClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def build_payload(self, prompt: str, response_schema: Dict[str, Any]) -> Dict[str, Any]:
        """构建 generateContent 请求体"""
        return {
            "contents": [
                {"role": "user", "parts": [{"text": prompt}]},
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
                "temperature": self.temperature,
            },
        }

    async def generate_json(self, prompt: str, response_schema: Dict[str, Any]) -> str:
        """
        生成 JSON 文本

        Args:
            prompt: 提示词
            response_schema: 输出结构约束

        Returns:
            模型返回的 JSON 文本

        Raises:
            GenAIConfigError: 未配置密钥
            GenAIBlockedError: 请求被安全策略拦截
            GenAIError: 网络或 HTTP 错误
            GenAIResponseError: 响应中没有文本
        """
        if not self.api_key:
            raise GenAIConfigError(MISSING_KEY_MESSAGE)

        payload = self.build_payload(prompt, response_schema)

        logger.info("genai_request_started", model=self.model, prompt_chars=len(prompt))

        try:
            response = await self._client.post(self.endpoint, json=payload)
        except httpx.TimeoutException as e:
            raise GenAIError(f"Request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise GenAIError(f"Failed to connect to {self.base_url}: {e}") from e

        if not response.is_success:
            self._handle_error(response)

        try:
            data = response.json()
        except ValueError as e:
            raise GenAIResponseError(f"Response is not valid JSON: {e}") from e

        text = self._extract_text(data)

        logger.info(
            "genai_request_completed",
            model=self.model,
            status=response.status_code,
            response_chars=len(text),
        )
        return text

    def _handle_error(self, response: httpx.Response) -> None:
        """将错误响应转换为异常，文本形如 ``400 INVALID_ARGUMENT: ... [API_KEY_INVALID]``"""
        status_code = response.status_code
        try:
            payload = response.json()
        except ValueError:
            payload = None

        error = payload.get("error") if isinstance(payload, dict) else None
        details: Dict[str, Any] = error if isinstance(error, dict) else {}

        message = details.get("message")
        if not message and isinstance(error, str):
            message = error
        message = message or response.text or response.reason_phrase
        status = details.get("status") or response.reason_phrase

        text = f"{status_code} {status}: {message}"
        reasons = self._error_reasons(details)
        if reasons:
            text += f" [{', '.join(reasons)}]"

        logger.warning("genai_request_failed", status=status_code, error=text)
        raise GenAIError(text, status_code=status_code, details=details)

    @staticmethod
    def _error_reasons(details: Dict[str, Any]) -> List[str]:
        reasons = []
        for item in details.get("details", []) or []:
            if isinstance(item, dict) and item.get("reason"):
                reasons.append(item["reason"])
        return reasons

    @staticmethod
    def _extract_text(data: Dict[str, Any]) -> str:
        """从 generateContent 响应中取出文本"""
        if not isinstance(data, dict):
            raise GenAIResponseError("Response body is not a JSON object")

        feedback = data.get("promptFeedback") or {}
        if isinstance(feedback, dict) and feedback.get("blockReason"):
            raise GenAIBlockedError(feedback["blockReason"], details=feedback)

        candidates = data.get("candidates") or []
        if not isinstance(candidates, list) or not candidates:
            raise GenAIResponseError("Response contains no candidates")

        candidate = candidates[0]
        if not isinstance(candidate, dict):
            raise GenAIResponseError("Response candidate is not a JSON object")
        finish_reason = candidate.get("finishReason")
        if finish_reason in BLOCKING_FINISH_REASONS:
            raise GenAIBlockedError(finish_reason, details=candidate)

        content = candidate.get("content")
        parts = (content.get("parts") if isinstance(content, dict) else None) or []
        text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
        if not text:
            raise GenAIResponseError("Response contains no text")
        return text
