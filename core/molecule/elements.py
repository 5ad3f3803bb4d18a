"""
元素属性表

CPK 配色与共价半径 (Å)，键名为大写元素符号，未知元素回落到 DEFAULT。
"""
from types import MappingProxyType
from typing import Mapping

DEFAULT_KEY = "DEFAULT"

CPK_COLORS: Mapping[str, str] = MappingProxyType({
    "H": "#FFFFFF",
    "C": "#282828",
    "N": "#0000FF",
    "O": "#FF0000",
    "F": "#90E050",
    "CL": "#1FF01F",
    "BR": "#A62929",
    "I": "#940094",
    "S": "#FFFF00",
    "P": "#FFA500",
    "B": "#FA8072",
    "SI": "#F0C8A0",
    DEFAULT_KEY: "#FFC0CB",  # 未知元素显示为粉色
})

COVALENT_RADII: Mapping[str, float] = MappingProxyType({
    "H": 0.37,
    "C": 0.77,
    "N": 0.75,
    "O": 0.73,
    "F": 0.71,
    "S": 1.02,
    "CL": 0.99,
    "P": 1.1,
    "SI": 1.17,
    "BR": 1.14,
    "I": 1.33,
    DEFAULT_KEY: 0.8,
})


def get_atom_color(element: str) -> str:
    """元素显示颜色"""
    return CPK_COLORS.get(element.upper(), CPK_COLORS[DEFAULT_KEY])


def get_covalent_radius(element: str) -> float:
    """元素共价半径 (Å)"""
    return COVALENT_RADII.get(element.upper(), COVALENT_RADII[DEFAULT_KEY])
