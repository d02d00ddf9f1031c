"""
계층적 결정론적 시드 파생

부모 시드와 작은 정수 키(3축 좌표 또는 인덱스)를 해시로 결합해
독립적인 자식 시드를 만든다. 덧셈이 아닌 해시 결합이므로
키 사이의 산술 관계가 시드 사이의 관계로 이어지지 않는다.
"""

from typing import Iterable, Tuple

from utils.constants import SEED_MASK

_U64 = 0xFFFFFFFFFFFFFFFF
_HASH_INIT = 0xA5A5A5A5A5A5A5A5

# 키 종류별 도메인 태그 (좌표 키와 인덱스 키가 겹치지 않도록)
_COORD_TAG = 0x436F6F7264  # "Coord"
_INDEX_TAG = 0x496E646578  # "Index"


def _splitmix64(x: int) -> int:
    x = (x + 0x9E3779B97F4A7C15) & _U64
    z = x
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _U64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _U64
    return (z ^ (z >> 31)) & _U64


def hash_ints(values: Iterable[int]) -> int:
    """
    정수 시퀀스를 하나의 시드로 결합 (순서 민감)

    Args:
        values: 정수 시퀀스 (음수 허용, 64비트로 마스킹)

    Returns:
        음이 아닌 32비트 시드
    """
    acc = _HASH_INIT
    for value in values:
        acc = _splitmix64(acc ^ (int(value) & _U64))
    # 상위/하위 32비트를 접어서 마스킹
    return ((acc >> 32) ^ acc) & SEED_MASK


def derive(parent_seed: int, coord: Tuple[int, int, int]) -> int:
    """
    3축 좌표 키로 자식 시드 파생

    Args:
        parent_seed: 부모 시드
        coord: (x, y, z) 정수 좌표

    Returns:
        자식 시드
    """
    x, y, z = coord
    return hash_ints((_COORD_TAG, parent_seed, x, y, z))


def derive_indexed(parent_seed: int, index: int) -> int:
    """인덱스 키로 자식 시드 파생"""
    return hash_ints((_INDEX_TAG, parent_seed, index))


def derive_path(root_seed: int, *indices: int) -> int:
    """
    인덱스 경로를 따라 계층적으로 시드 파생

    derive_path(s, 3, 1) == derive_indexed(derive_indexed(s, 3), 1)
    """
    seed = root_seed
    for index in indices:
        seed = derive_indexed(seed, index)
    return seed
