"""
FastAPI 依赖注入
"""
from typing import Optional

from core.config import get_settings
from core.genai import GenAIClient
from core.services.design_service import DesignService
from core.services.structure_service import (
    StructureService,
    get_structure_service as _get_structure_service,
    reset_structure_service,
)


# 全局单例存储
_genai_client: Optional[GenAIClient] = None
_design_service: Optional[DesignService] = None


def get_structure_service() -> StructureService:
    """获取结构服务"""
    return _get_structure_service()


def get_genai_client() -> GenAIClient:
    """获取生成式 AI 客户端"""
    global _genai_client

    if _genai_client is None:
        settings = get_settings()
        _genai_client = GenAIClient(
            api_key=settings.genai.api_key,
            model=settings.genai.model,
            base_url=settings.genai.base_url,
            temperature=settings.genai.temperature,
            timeout=settings.genai.timeout,
            max_retries=settings.genai.max_retries,
        )

    return _genai_client


def get_design_service() -> DesignService:
    """
    获取设计服务

    使用方式:
    @router.post("/example")
    async def example(service: DesignService = Depends(get_design_service)):
        ...
    """
    global _design_service

    if _design_service is None:
        _design_service = DesignService(
            client=get_genai_client(),
            structure_service=get_structure_service(),
        )

    return _design_service


async def close_clients() -> None:
    """关闭 HTTP 客户端"""
    global _genai_client, _design_service
    if _genai_client is not None:
        await _genai_client.close()
    _genai_client = None
    _design_service = None


def reset_singletons():
    """重置所有单例（用于测试）"""
    global _genai_client, _design_service
    _genai_client = None
    _design_service = None
    reset_structure_service()
