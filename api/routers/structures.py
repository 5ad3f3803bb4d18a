"""
结构预览与导出 API 路由
"""
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
import structlog

from api.dependencies import get_structure_service
from api.metrics import increment_export, increment_render
from api.middleware.error_handler import ErrorCode, StructureFormatError
from api.schemas.response import APIResponse
from api.schemas.structure import (
    CoordinateBlockRequest,
    ExportRequest,
    ParseResponse,
    RenderResponse,
    ValidateResponse,
)
from core.services.structure_service import (
    StructureService,
    StructureTooLargeError,
    StructureValidationError,
)

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/parse", response_model=APIResponse[ParseResponse])
async def parse_structure(
    request: CoordinateBlockRequest,
    service: StructureService = Depends(get_structure_service),
):
    """
    宽松解析坐标块并推断键连

    无法识别的数据行会被跳过；is_valid 给出严格校验结果，
    两者可能不一致（例如声明原子数与数据行数不符）。
    数据行数超过 VIEWER_MAX_ATOMS 时返回 400。
    """
    try:
        parsed = service.parse(request.xyz)
    except StructureTooLargeError as e:
        raise StructureFormatError(str(e), code=ErrorCode.STRUCTURE_TOO_LARGE) from e
    is_valid, _ = service.validate(request.xyz)

    data = parsed.to_dict()
    data["is_valid"] = is_valid

    return APIResponse(success=True, code=200, message="解析完成", data=data)


@router.post("/validate", response_model=APIResponse[ValidateResponse])
async def validate_structure(
    request: CoordinateBlockRequest,
    service: StructureService = Depends(get_structure_service),
):
    """严格校验坐标块"""
    is_valid, errors = service.validate(request.xyz)
    return APIResponse(
        success=True,
        code=200,
        message="结构验证完成",
        data=ValidateResponse(is_valid=is_valid, errors=errors),
    )


@router.post("/render")
async def render_structure(
    request: CoordinateBlockRequest,
    format: str = Query("json", pattern="^(json|svg)$", description="输出格式: json, svg"),
    service: StructureService = Depends(get_structure_service),
):
    """
    渲染结构

    - json: 返回场景图元（原子圆、键线、视口）
    - svg: 直接返回 SVG 文档；无法渲染时返回 JSON 提示
    """
    try:
        result = service.render(request.xyz)
    except StructureTooLargeError as e:
        raise StructureFormatError(str(e), code=ErrorCode.STRUCTURE_TOO_LARGE) from e
    increment_render(result.status.value)

    if format == "svg" and result.is_rendered:
        return Response(content=result.to_svg(), media_type="image/svg+xml")

    return APIResponse[RenderResponse](
        success=True,
        code=200,
        message=result.message or "渲染完成",
        data=result.to_dict(),
    )


@router.post("/export")
async def export_structure(
    request: ExportRequest,
    service: StructureService = Depends(get_structure_service),
):
    """
    导出 .xyz 文件

    坐标块未通过严格校验时拒绝导出，返回 400。
    """
    try:
        artifact = service.export(request.xyz, request.material_name)
    except StructureValidationError as e:
        increment_export(refused=True)
        raise StructureFormatError(str(e), code=ErrorCode.EXPORT_REFUSED) from e

    increment_export()

    ascii_name = artifact.filename.encode("ascii", "replace").decode("ascii").replace('"', "_")
    disposition = f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(artifact.filename)}"

    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": disposition},
    )
