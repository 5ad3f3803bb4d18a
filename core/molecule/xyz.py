"""
XYZ 坐标块解析与校验

坐标块格式:
- 第 1 行: 原子数
- 第 2 行: 注释/名称
- 其余行: ``元素 x y z``，以任意空白分隔

提供两条独立路径:
- parse_xyz: 宽松解析，跳过无法识别的行，从不抛出异常
- validate_xyz: 严格校验，任何一处不符即整体判定无效

两者对同一文本可能给出不同结论（例如声明原子数与实际行数不符时，
校验失败但解析仍能得到部分原子），渲染与导出均以严格校验为准。
"""
import math
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

import structlog

logger = structlog.get_logger(__name__)

# 十进制数，可带符号与指数部分
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_COUNT_RE = re.compile(r"\d+")

HEADER_LINES = 2


@dataclass(frozen=True)
class Atom:
    """原子（在所属列表中的下标即其标识）"""
    element: str
    x: float
    y: float
    z: float

    @property
    def position(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_dict(self) -> dict:
        return {"element": self.element, "x": self.x, "y": self.y, "z": self.z}


def _parse_decimal(token: str) -> Optional[float]:
    """解析有限十进制数，失败返回 None"""
    if not _DECIMAL_RE.fullmatch(token):
        return None
    value = float(token)
    if not math.isfinite(value):
        return None
    return value


def _parse_atom_line(line: str) -> Optional[Atom]:
    """解析单条原子记录，格式不符返回 None"""
    tokens = line.split()
    if len(tokens) != 4:
        return None

    coords = [_parse_decimal(token) for token in tokens[1:]]
    if any(c is None for c in coords):
        return None

    x, y, z = coords
    return Atom(element=tokens[0], x=x, y=y, z=z)


def _split_lines(text: str) -> List[str]:
    return text.strip().split("\n")


def parse_xyz(text: Optional[str]) -> List[Atom]:
    """
    宽松解析 XYZ 坐标块

    第 1 行的原子数仅作参考，不参与校验；无法解析的数据行直接跳过。

    Args:
        text: 坐标块文本

    Returns:
        按出现顺序排列的原子列表（可能为空）
    """
    if not text:
        return []

    lines = _split_lines(text)
    if len(lines) < HEADER_LINES + 1:
        return []

    atoms = []
    skipped = 0
    for line in lines[HEADER_LINES:]:
        atom = _parse_atom_line(line)
        if atom is None:
            skipped += 1
            continue
        atoms.append(atom)

    if skipped:
        logger.debug("xyz_lines_skipped", skipped=skipped, parsed=len(atoms))

    return atoms


def read_declared_count(text: Optional[str]) -> Optional[int]:
    """读取第 1 行声明的原子数（正整数），否则返回 None"""
    if not text:
        return None
    first = _split_lines(text)[0].strip()
    if not _COUNT_RE.fullmatch(first):
        return None
    count = int(first)
    return count if count > 0 else None


def count_data_lines(text: Optional[str]) -> int:
    """数据行数（第 3 行起，不解析内容），原子数的上界"""
    if not text:
        return 0
    return max(len(_split_lines(text)) - HEADER_LINES, 0)


def validate_xyz(text: Optional[str]) -> bool:
    """
    严格校验 XYZ 坐标块

    依次检查（遇到第一处失败即返回 False）:
    1. 文本非空
    2. 去除首尾空白后至少 3 行
    3. 第 1 行为正整数
    4. 数据行数等于声明的原子数
    5. 每条数据行恰好 4 个字段
    6. 后 3 个字段均为有限十进制数（元素符号不做化学合法性检查）
    """
    if not text or not isinstance(text, str):
        return False

    lines = _split_lines(text)
    if len(lines) < HEADER_LINES + 1:
        return False

    declared = read_declared_count(text)
    if declared is None:
        return False

    if len(lines) - HEADER_LINES != declared:
        return False

    for line in lines[HEADER_LINES:]:
        if _parse_atom_line(line) is None:
            return False

    return True
