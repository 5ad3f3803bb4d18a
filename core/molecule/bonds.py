"""
键推断

仅依据原子间距离与共价半径判断成键，不考虑键级、芳香性或价态。
"""
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from .elements import get_covalent_radius
from .xyz import Atom

BOND_TOLERANCE = 1.2    # 允许略微拉长的键
MIN_BOND_DISTANCE = 0.5  # 低于此距离视为重叠坐标，不成键


@dataclass(frozen=True)
class Bond:
    """键，atom1 < atom2，均为原子列表下标"""
    atom1: int
    atom2: int

    def to_dict(self) -> dict:
        return {"atom1": self.atom1, "atom2": self.atom2}


def calculate_bonds(atoms: Sequence[Atom]) -> List[Bond]:
    """
    推断键连关系

    对每一对原子 (i, j), i < j，当 0.5 < d < (r_i + r_j) * 1.2 时成键。
    逐行计算距离，额外内存与原子数成线性关系。

    Args:
        atoms: 原子列表

    Returns:
        键列表，按 (i, j) 行优先顺序排列
    """
    n_atoms = len(atoms)
    if n_atoms < 2:
        return []

    positions = np.array([atom.position for atom in atoms], dtype=np.float64)
    radii = np.array([get_covalent_radius(atom.element) for atom in atoms], dtype=np.float64)

    bonds = []
    for i in range(n_atoms - 1):
        deltas = positions[i + 1:] - positions[i]
        distances = np.sqrt(np.sum(deltas ** 2, axis=1))
        max_lengths = (radii[i + 1:] + radii[i]) * BOND_TOLERANCE

        bonded = (distances > MIN_BOND_DISTANCE) & (distances < max_lengths)
        for offset in np.nonzero(bonded)[0]:
            bonds.append(Bond(atom1=i, atom2=i + 1 + int(offset)))

    return bonds
