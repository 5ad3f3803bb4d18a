"""
材料设计服务

将用户需求转为提示词，调用生成式 AI，校验返回的材料记录，
并生成结构预览。调用失败原样抛出，由接口层分类展示。
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional
import json
import time

import structlog

from core.design import (
    MaterialRecord,
    RESPONSE_SCHEMA,
    UserRequirements,
    build_prompt,
)
from core.design.models import REQUIRED_RECORD_FIELDS
from core.genai import GenAIClient
from core.services.structure_service import (
    INVALID_STRUCTURE_MESSAGE,
    RenderResult,
    RenderStatus,
    StructureService,
    StructureTooLargeError,
    get_structure_service,
)

logger = structlog.get_logger(__name__)

INCOMPLETE_DATA_MESSAGE = "Received incomplete data from the API."


class MaterialDataError(Exception):
    """AI 返回的材料记录不完整"""
    pass


@dataclass
class DesignOutcome:
    """一次设计请求的结果"""
    record: MaterialRecord
    render: RenderResult
    duration_ms: float = 0.0

    @property
    def can_export(self) -> bool:
        return self.render.is_rendered

    def to_dict(self) -> Dict[str, Any]:
        return {
            "material": self.record.to_dict(),
            "structure": self.render.to_dict(),
            "can_export": self.can_export,
            "duration_ms": round(self.duration_ms, 2),
        }


def parse_material_record(text: str) -> MaterialRecord:
    """
    解析模型输出的 JSON 文本

    Raises:
        ValueError: 文本不是合法 JSON
        MaterialDataError: 缺少字段或字段为空
    """
    data = json.loads(text)
    if not isinstance(data, dict):
        raise MaterialDataError(INCOMPLETE_DATA_MESSAGE)

    for key in REQUIRED_RECORD_FIELDS:
        value = data.get(key)
        if not isinstance(value, str) or not value:
            raise MaterialDataError(INCOMPLETE_DATA_MESSAGE)

    return MaterialRecord.model_validate(data)


class DesignService:
    """
    材料设计服务

    Args:
        client: 生成式 AI 客户端
        structure_service: 结构服务（默认使用全局实例）
    """

    def __init__(
        self,
        client: GenAIClient,
        structure_service: Optional[StructureService] = None,
    ):
        self.client = client
        self.structure_service = structure_service or get_structure_service()

    async def design_material(self, requirements: UserRequirements) -> MaterialRecord:
        """
        调用生成式 AI 设计材料

        Raises:
            GenAIError: AI 调用失败
            MaterialDataError: 返回记录不完整
        """
        prompt = build_prompt(requirements)

        try:
            text = await self.client.generate_json(prompt, RESPONSE_SCHEMA)
            record = parse_material_record(text)
        except Exception as e:
            logger.error("design_request_failed", error=str(e), error_type=type(e).__name__)
            raise

        logger.info("material_designed", material_name=record.material_name)
        return record

    async def design(self, requirements: UserRequirements) -> DesignOutcome:
        """设计材料并生成结构预览"""
        start_time = time.perf_counter()

        record = await self.design_material(requirements)
        try:
            render = self.structure_service.render(record.coordinate_block)
        except StructureTooLargeError as e:
            logger.warning("design_structure_too_large", n_atoms=e.n_atoms, max_atoms=e.max_atoms)
            render = RenderResult(status=RenderStatus.INVALID, message=INVALID_STRUCTURE_MESSAGE)

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "design_completed",
            material_name=record.material_name,
            structure_status=render.status.value,
            duration_ms=round(duration_ms, 2),
        )
        return DesignOutcome(record=record, render=render, duration_ms=duration_ms)
