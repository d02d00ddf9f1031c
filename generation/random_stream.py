"""
시드 기반 결정론적 난수 스트림
"""

import numpy as np
from typing import Sequence, TypeVar

from utils.constants import SEED_MASK
from utils.helpers import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class RandomStream:
    """
    단일 정수 시드로 초기화되는 난수 스트림

    같은 시드로 만들고 같은 순서로 호출하면 항상 동일한 값을 낸다.
    전역 난수 상태를 쓰지 않으므로 생성 호출마다 자신의 스트림을 넘겨야 한다.
    한 스트림을 여러 스레드에서 동시에 사용하지 말 것.
    """

    def __init__(self, seed: int):
        self._seed = int(seed)
        self._rng = np.random.Generator(np.random.PCG64(self._seed & 0xFFFFFFFFFFFFFFFF))

    @property
    def seed(self) -> int:
        """스트림의 초기 시드 (재현용)"""
        return self._seed

    def uniform_float(self) -> float:
        """[0, 1) 균등 분포"""
        return float(self._rng.random())

    def uniform_float_range(self, lo: float, hi: float) -> float:
        """[lo, hi) 균등 분포"""
        return lo + (hi - lo) * self.uniform_float()

    def uniform_int_range(self, lo: int, hi: int) -> int:
        """
        [lo, hi] 정수 균등 분포 (양 끝 포함)

        hi <= lo 이면 난수를 소비하지 않고 lo를 반환한다.
        """
        if hi <= lo:
            return lo
        return int(self._rng.integers(lo, hi, endpoint=True))

    def uniform_angle(self) -> float:
        """[0, 2π) 균등 분포 각도"""
        return 2.0 * np.pi * self.uniform_float()

    def normal(self, mean: float = 0.0, stddev: float = 1.0) -> float:
        """정규 분포"""
        return float(self._rng.normal(mean, stddev))

    def choice(self, items: Sequence[T]) -> T:
        """균등 선택"""
        if len(items) == 0:
            raise ValueError("cannot choose from an empty sequence")
        return items[self.uniform_int_range(0, len(items) - 1)]

    def weighted_choice(self, items: Sequence[T], weights: Sequence[float]) -> T:
        """
        가중치에 비례한 확률로 항목 선택

        가중치 합이 1일 필요는 없다. 음수 가중치는 0으로 취급한다.
        모든 가중치가 0 이하이면 균등 선택으로 대체한다.
        어느 경우든 균등 난수를 정확히 한 번 소비한다.

        Args:
            items: 후보 항목
            weights: 항목별 가중치

        Returns:
            선택된 항목
        """
        if len(items) == 0:
            raise ValueError("cannot choose from an empty sequence")
        if len(items) != len(weights):
            raise ValueError(
                f"items and weights differ in length ({len(items)} != {len(weights)})"
            )

        u = self.uniform_float()
        clipped = [max(float(w), 0.0) for w in weights]
        total = sum(clipped)

        if total <= 0.0:
            logger.debug("weighted_choice: no positive weights, falling back to uniform choice")
            return items[min(int(u * len(items)), len(items) - 1)]

        target = u * total
        cumulative = 0.0
        for item, weight in zip(items, clipped):
            cumulative += weight
            if target < cumulative:
                return item
        # 부동소수점 누적 오차: 양의 가중치를 가진 마지막 항목
        for item, weight in zip(reversed(items), reversed(clipped)):
            if weight > 0:
                return item
        return items[-1]

    def next_seed(self) -> int:
        """스트림에서 32비트 시드 하나를 뽑는다"""
        return int(self._rng.integers(0, SEED_MASK, endpoint=True))

    def fork(self) -> "RandomStream":
        """
        독립적인 자식 스트림 생성

        부모 스트림은 정수 하나를 뽑은 것과 똑같이 진행된다.
        """
        return RandomStream(self.next_seed())

    def __repr__(self) -> str:
        return f"RandomStream(seed={self._seed})"
