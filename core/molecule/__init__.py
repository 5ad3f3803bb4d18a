# 分子结构解析、键推断与二维投影
from .elements import CPK_COLORS, COVALENT_RADII, get_atom_color, get_covalent_radius
from .xyz import Atom, parse_xyz, validate_xyz, read_declared_count, count_data_lines
from .bonds import Bond, calculate_bonds, BOND_TOLERANCE, MIN_BOND_DISTANCE
from .projection import (
    Viewport,
    AtomCircle,
    BondLine,
    Scene,
    project_scene,
)
from .svg import scene_to_svg

__all__ = [
    "CPK_COLORS",
    "COVALENT_RADII",
    "get_atom_color",
    "get_covalent_radius",
    "Atom",
    "parse_xyz",
    "validate_xyz",
    "read_declared_count",
    "count_data_lines",
    "Bond",
    "calculate_bonds",
    "BOND_TOLERANCE",
    "MIN_BOND_DISTANCE",
    "Viewport",
    "AtomCircle",
    "BondLine",
    "Scene",
    "project_scene",
    "scene_to_svg",
]
