"""
二维投影渲染

将原子与键正交投影到屏幕平面（丢弃 z，翻转 y），计算视口并生成
可绘制图元：每个原子一个圆，每条键一条线段。
"""
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .bonds import Bond
from .elements import get_atom_color
from .xyz import Atom

VIEWPORT_PADDING = 20.0
DEGENERATE_EXTENT = 0.1
FALLBACK_VIEWPORT_SIZE = 100.0
ATOM_RADIUS_RATIO = 0.05
BOND_WIDTH_RATIO = 0.2
ATOM_OUTLINE_COLOR = "#FFFFFF"
BOND_COLOR = "#555"


@dataclass(frozen=True)
class Viewport:
    x: float
    y: float
    width: float
    height: float

    @property
    def view_box(self) -> str:
        return f"{self.x} {self.y} {self.width} {self.height}"

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class AtomCircle:
    index: int
    element: str
    center: Tuple[float, float]
    radius: float
    fill: str
    stroke: str
    stroke_width: float

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "element": self.element,
            "cx": self.center[0],
            "cy": self.center[1],
            "r": self.radius,
            "fill": self.fill,
            "stroke": self.stroke,
            "stroke_width": self.stroke_width,
        }


@dataclass(frozen=True)
class BondLine:
    atom1: int
    atom2: int
    p1: Tuple[float, float]
    p2: Tuple[float, float]
    width: float
    color: str

    def to_dict(self) -> dict:
        return {
            "atom1": self.atom1,
            "atom2": self.atom2,
            "x1": self.p1[0],
            "y1": self.p1[1],
            "x2": self.p2[0],
            "y2": self.p2[1],
            "width": self.width,
            "color": self.color,
        }


@dataclass(frozen=True)
class Scene:
    """可绘制场景，键线绘制在原子圆下方"""
    viewport: Viewport
    atom_radius: float
    bond_width: float
    circles: Tuple[AtomCircle, ...]
    lines: Tuple[BondLine, ...]

    def to_dict(self) -> dict:
        return {
            "viewport": self.viewport.to_dict(),
            "atom_radius": self.atom_radius,
            "bond_width": self.bond_width,
            "atoms": [c.to_dict() for c in self.circles],
            "bonds": [line.to_dict() for line in self.lines],
        }


def project_point(atom: Atom) -> Tuple[float, float]:
    """正交投影，y 轴向下"""
    return (atom.x, -atom.y)


def compute_viewport(points: Sequence[Tuple[float, float]]) -> Viewport:
    """
    计算视口

    包围盒四周留 20 单位边距；宽或高 <= 0.1 时该方向使用固定尺寸 100。
    """
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)

    content_width = max_x - min_x
    content_height = max_y - min_y

    width = content_width + VIEWPORT_PADDING * 2 if content_width > DEGENERATE_EXTENT else FALLBACK_VIEWPORT_SIZE
    height = content_height + VIEWPORT_PADDING * 2 if content_height > DEGENERATE_EXTENT else FALLBACK_VIEWPORT_SIZE

    return Viewport(
        x=min_x - VIEWPORT_PADDING,
        y=min_y - VIEWPORT_PADDING,
        width=width,
        height=height,
    )


def project_scene(atoms: Sequence[Atom], bonds: Sequence[Bond]) -> Optional[Scene]:
    """
    生成二维场景

    Args:
        atoms: 原子列表
        bonds: 由 calculate_bonds 得到的键列表

    Returns:
        Scene；原子列表为空时返回 None，由调用方显示“无分子”状态
    """
    if not atoms:
        return None

    points = [project_point(atom) for atom in atoms]
    viewport = compute_viewport(points)

    atom_radius = min(viewport.width, viewport.height) * ATOM_RADIUS_RATIO
    bond_width = atom_radius * BOND_WIDTH_RATIO

    lines = tuple(
        BondLine(
            atom1=bond.atom1,
            atom2=bond.atom2,
            p1=points[bond.atom1],
            p2=points[bond.atom2],
            width=bond_width,
            color=BOND_COLOR,
        )
        for bond in bonds
    )

    circles = tuple(
        AtomCircle(
            index=index,
            element=atom.element,
            center=points[index],
            radius=atom_radius,
            fill=get_atom_color(atom.element),
            stroke=ATOM_OUTLINE_COLOR,
            stroke_width=bond_width * 0.5,
        )
        for index, atom in enumerate(atoms)
    )

    return Scene(
        viewport=viewport,
        atom_radius=atom_radius,
        bond_width=bond_width,
        circles=circles,
        lines=lines,
    )
