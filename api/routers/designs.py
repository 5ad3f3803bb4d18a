"""
材料设计 API 路由
"""
from fastapi import APIRouter, Depends
import structlog

from api.dependencies import get_design_service
from api.metrics import increment_design, increment_render
from api.middleware.error_handler import DesignFailedError
from api.schemas.design import DesignResponse, OptionsResponse
from api.schemas.response import APIResponse
from core.design import UserRequirements, property_options
from core.services.design_service import DesignService

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("", response_model=APIResponse[DesignResponse])
async def create_design(
    requirements: UserRequirements,
    service: DesignService = Depends(get_design_service),
):
    """
    提交设计需求

    调用生成式 AI 设计材料，返回材料记录与结构预览。
    失败时按类别返回唯一的用户提示：
    - 安全拦截: 422
    - 凭证/配置错误: 503
    - 限流: 429
    - 请求格式错误: 400
    - 其他: 502
    """
    increment_design("requested")

    try:
        outcome = await service.design(requirements)
    except Exception as e:
        failure = DesignFailedError.from_exception(e)
        increment_design("failed", failure.classification.category.value)
        raise failure from e

    increment_design("succeeded")
    increment_render(outcome.render.status.value)

    return APIResponse(
        success=True,
        code=200,
        message=f"Material designed: {outcome.record.material_name}",
        data=outcome.to_dict(),
    )


@router.get("/options", response_model=APIResponse[OptionsResponse])
async def get_options():
    """获取下拉字段可选值"""
    return APIResponse(
        success=True,
        code=200,
        message="获取选项成功",
        data=OptionsResponse(options=property_options()),
    )
