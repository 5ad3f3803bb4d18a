"""
结构服务

处理 AI 返回的 XYZ 坐标块：解析、校验、二维渲染与文件导出
"""
from typing import Dict, List, Optional, Any, Tuple
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
import re

import structlog

from core.molecule import (
    Atom,
    Bond,
    Scene,
    calculate_bonds,
    count_data_lines,
    parse_xyz,
    project_scene,
    read_declared_count,
    scene_to_svg,
    validate_xyz,
)

logger = structlog.get_logger(__name__)

INVALID_STRUCTURE_MESSAGE = "Invalid or malformed molecular structure data received."
EMPTY_STRUCTURE_MESSAGE = "No molecule to display"

EXPORT_SUFFIX = ".xyz"
EXPORT_MEDIA_TYPE = "text/plain; charset=utf-8"
EXPORT_FALLBACK_NAME = "material"


class RenderStatus(str, Enum):
    """渲染结果状态"""
    RENDERED = "rendered"
    INVALID = "invalid"
    EMPTY = "empty"


@dataclass(frozen=True)
class ParsedStructure:
    """宽松解析结果"""
    atoms: Tuple[Atom, ...]
    bonds: Tuple[Bond, ...]
    declared_count: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_atoms": len(self.atoms),
            "declared_count": self.declared_count,
            "atoms": [a.to_dict() for a in self.atoms],
            "bonds": [b.to_dict() for b in self.bonds],
        }


@dataclass(frozen=True)
class RenderResult:
    """渲染结果"""
    status: RenderStatus
    message: Optional[str] = None
    structure: Optional[ParsedStructure] = None
    scene: Optional[Scene] = None

    @property
    def is_rendered(self) -> bool:
        return self.status == RenderStatus.RENDERED

    def to_svg(self) -> Optional[str]:
        """渲染成功时返回 SVG 文档"""
        if self.scene is None:
            return None
        return scene_to_svg(self.scene)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "n_atoms": len(self.structure.atoms) if self.structure else 0,
            "n_bonds": len(self.structure.bonds) if self.structure else 0,
            "scene": self.scene.to_dict() if self.scene else None,
        }


@dataclass
class ExportArtifact:
    """导出文件"""
    filename: str
    content: bytes
    media_type: str = EXPORT_MEDIA_TYPE

    @property
    def size(self) -> int:
        return len(self.content)


class StructureValidationError(Exception):
    """结构验证错误"""
    pass


class StructureTooLargeError(Exception):
    """坐标块原子数超过上限"""

    def __init__(self, n_atoms: int, max_atoms: int):
        self.n_atoms = n_atoms
        self.max_atoms = max_atoms
        super().__init__(f"Coordinate block has {n_atoms} atom lines; the limit is {max_atoms}")


def parse_structure(coordinate_block: Optional[str]) -> ParsedStructure:
    """宽松解析并推断键连"""
    atoms = parse_xyz(coordinate_block)
    bonds = calculate_bonds(atoms)
    return ParsedStructure(
        atoms=tuple(atoms),
        bonds=tuple(bonds),
        declared_count=read_declared_count(coordinate_block),
    )


def render_structure(coordinate_block: Optional[str]) -> RenderResult:
    """
    渲染入口

    严格校验失败 -> INVALID；解析后无原子 -> EMPTY；否则生成场景。
    """
    if not validate_xyz(coordinate_block):
        logger.info("structure_render_rejected", reason="invalid_format")
        return RenderResult(status=RenderStatus.INVALID, message=INVALID_STRUCTURE_MESSAGE)

    structure = parse_structure(coordinate_block)
    if not structure.atoms:
        logger.info("structure_render_rejected", reason="no_atoms")
        return RenderResult(status=RenderStatus.EMPTY, message=EMPTY_STRUCTURE_MESSAGE, structure=structure)

    scene = project_scene(structure.atoms, structure.bonds)

    logger.debug(
        "structure_rendered",
        n_atoms=len(structure.atoms),
        n_bonds=len(structure.bonds),
    )
    return RenderResult(status=RenderStatus.RENDERED, structure=structure, scene=scene)


def export_filename(material_name: Optional[str]) -> str:
    """材料名中的连续空白替换为下划线，为空时使用固定名称"""
    stem = re.sub(r"\s+", "_", material_name or "") or EXPORT_FALLBACK_NAME
    return f"{stem}{EXPORT_SUFFIX}"


def build_export(coordinate_block: Optional[str], material_name: Optional[str]) -> ExportArtifact:
    """
    生成 .xyz 导出文件

    Raises:
        StructureValidationError: 坐标块未通过严格校验，拒绝导出
    """
    if not validate_xyz(coordinate_block):
        raise StructureValidationError("Coordinate block failed validation; export refused")

    content = coordinate_block.encode("utf-8")
    return ExportArtifact(
        filename=export_filename(material_name),
        content=content,
    )


class StructureService:
    """
    结构服务

    提供：
    - 宽松解析与键推断
    - 严格格式校验
    - 二维渲染（按原始文本缓存）
    - .xyz 导出
    """

    def __init__(self, cache_size: int = 256, max_atoms: Optional[int] = None):
        """
        初始化结构服务

        Args:
            cache_size: 渲染结果缓存条目数，0 表示不缓存
            max_atoms: 解析与渲染允许的最大原子数，None 表示不限制
        """
        self.cache_size = cache_size
        self.max_atoms = max_atoms
        if cache_size > 0:
            self._render = lru_cache(maxsize=cache_size)(render_structure)
        else:
            self._render = render_structure

        logger.info("structure_service_initialized", cache_size=cache_size, max_atoms=max_atoms)

    def check_size(self, coordinate_block: Optional[str]) -> None:
        """
        检查原子数上限（按数据行数计，在解析与键推断之前）

        Raises:
            StructureTooLargeError: 超过上限
        """
        if self.max_atoms is None:
            return
        n_lines = count_data_lines(coordinate_block)
        if n_lines > self.max_atoms:
            logger.warning("structure_too_large", n_lines=n_lines, max_atoms=self.max_atoms)
            raise StructureTooLargeError(n_lines, self.max_atoms)

    def parse(self, coordinate_block: Optional[str]) -> ParsedStructure:
        """宽松解析"""
        self.check_size(coordinate_block)
        return parse_structure(coordinate_block)

    def validate(self, coordinate_block: Optional[str]) -> Tuple[bool, List[str]]:
        """
        严格校验

        Returns:
            (is_valid, errors)
        """
        if validate_xyz(coordinate_block):
            return True, []
        return False, [INVALID_STRUCTURE_MESSAGE]

    def render(self, coordinate_block: Optional[str]) -> RenderResult:
        """渲染（相同文本返回同一结果）"""
        self.check_size(coordinate_block)
        return self._render(coordinate_block)

    def export(self, coordinate_block: Optional[str], material_name: Optional[str]) -> ExportArtifact:
        """导出 .xyz 文件"""
        artifact = build_export(coordinate_block, material_name)
        logger.info("structure_exported", filename=artifact.filename, size=artifact.size)
        return artifact

    def cache_info(self) -> Optional[Dict[str, int]]:
        """缓存统计"""
        if not hasattr(self._render, "cache_info"):
            return None
        info = self._render.cache_info()
        return {
            "hits": info.hits,
            "misses": info.misses,
            "size": info.currsize,
            "max_size": info.maxsize,
        }

    def clear_cache(self) -> None:
        if hasattr(self._render, "cache_clear"):
            self._render.cache_clear()


# 全局服务实例
_service: Optional[StructureService] = None


def get_structure_service(**kwargs) -> StructureService:
    """获取全局结构服务实例"""
    global _service

    if _service is None:
        from core.config import get_settings
        viewer = get_settings().viewer
        kwargs.setdefault("cache_size", viewer.render_cache_size)
        kwargs.setdefault("max_atoms", viewer.max_atoms)
        _service = StructureService(**kwargs)

    return _service


def reset_structure_service() -> None:
    """重置全局实例（用于测试）"""
    global _service
    _service = None
