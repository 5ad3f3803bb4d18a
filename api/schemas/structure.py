"""
结构相关数据模型
"""
from pydantic import BaseModel, Field
from typing import Optional, List


class CoordinateBlockRequest(BaseModel):
    """坐标块请求"""
    xyz: str = Field(..., description="XYZ 坐标块文本")


class ExportRequest(CoordinateBlockRequest):
    """导出请求"""
    material_name: str = Field(default="", description="材料名称（用于文件名）")


class AtomInfo(BaseModel):
    """原子"""
    element: str = Field(..., description="元素符号")
    x: float
    y: float
    z: float


class BondInfo(BaseModel):
    """键（原子下标）"""
    atom1: int
    atom2: int


class ParseResponse(BaseModel):
    """宽松解析结果"""
    n_atoms: int = Field(..., description="解析得到的原子数")
    declared_count: Optional[int] = Field(None, description="第 1 行声明的原子数")
    is_valid: bool = Field(..., description="是否通过严格校验")
    atoms: List[AtomInfo] = Field(default_factory=list)
    bonds: List[BondInfo] = Field(default_factory=list)


class ValidateResponse(BaseModel):
    """严格校验结果"""
    is_valid: bool
    errors: List[str] = Field(default_factory=list)


class ViewportInfo(BaseModel):
    x: float
    y: float
    width: float
    height: float


class AtomCircleInfo(BaseModel):
    index: int
    element: str
    cx: float
    cy: float
    r: float
    fill: str
    stroke: str
    stroke_width: float


class BondLineInfo(BaseModel):
    atom1: int
    atom2: int
    x1: float
    y1: float
    x2: float
    y2: float
    width: float
    color: str


class SceneInfo(BaseModel):
    """二维场景"""
    viewport: ViewportInfo
    atom_radius: float
    bond_width: float
    atoms: List[AtomCircleInfo]
    bonds: List[BondLineInfo]


class RenderResponse(BaseModel):
    """渲染结果"""
    status: str = Field(..., description="rendered / invalid / empty")
    message: Optional[str] = Field(None, description="无法渲染时的提示")
    n_atoms: int = 0
    n_bonds: int = 0
    scene: Optional[SceneInfo] = None
