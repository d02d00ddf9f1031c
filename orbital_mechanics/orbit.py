"""
케플러 방정식 해법, 근점이각 변환 및 궤도 요소 클래스
"""

import numpy as np
from scipy.optimize import brentq
from dataclasses import dataclass
from typing import Optional

from utils.constants import CIRCULAR_ECCENTRICITY, KEPLER_TOLERANCE, KEPLER_MAX_ITER
from utils.helpers import get_logger
from orbital_mechanics.coordinate_transforms import elements_to_position

logger = get_logger(__name__)


def kepler_residual(E: float, M: float, e: float) -> float:
    """케플러 방정식 잔차 E - e*sin(E) - M"""
    return E - e * np.sin(E) - M


def solve_kepler(
    M: float,
    e: float,
    tolerance: float = KEPLER_TOLERANCE,
    max_iter: int = KEPLER_MAX_ITER,
) -> float:
    """
    Newton-Raphson 방법으로 케플러 방정식 M = E - e*sin(E) 풀이

    Newton 반복이 수렴하지 않으면 Brent 법으로 다시 풀고, 그래도 예외 없이
    잔차가 가장 작은 추정값을 반환한다.
    보장이 필요한 호출자는 kepler_residual로 직접 확인해야 한다.

    Args:
        M: 평균 근점이각 [rad]
        e: 이심률
        tolerance: 잔차 허용 오차
        max_iter: 최대 반복 횟수

    Returns:
        이심 근점이각 E [rad]
    """
    if e < CIRCULAR_ECCENTRICITY:
        return M

    # 고이심률에서는 π에서 시작해야 발산하지 않는다
    E = M if e < 0.8 else np.pi
    for _ in range(max_iter):
        f = kepler_residual(E, M, e)
        if abs(f) < tolerance:
            return float(E)
        df = 1 - e * np.cos(E)
        E = E - f / df

    # Newton이 수렴하지 않으면 [M - e, M + e] 구간 Brent 법으로 대체
    logger.debug("Kepler Newton iteration did not converge: M=%.6f e=%.6f", M, e)
    best = E if np.isfinite(E) else M
    root = brentq(kepler_residual, M - e, M + e, args=(M, e),
                  maxiter=max(max_iter, 1), disp=False)
    if abs(kepler_residual(root, M, e)) < abs(kepler_residual(best, M, e)):
        best = root
    return float(best)


def eccentric_to_true(E: float, e: float) -> float:
    """
    이심 근점이각 → 진근점이각

    Args:
        E: 이심 근점이각 [rad]
        e: 이심률

    Returns:
        진근점이각 [rad]
    """
    if e < CIRCULAR_ECCENTRICITY:
        return E
    return float(2 * np.arctan2(np.sqrt(1 + e) * np.sin(E / 2),
                                np.sqrt(1 - e) * np.cos(E / 2)))


def mean_to_true(M: float, e: float) -> float:
    """평균 근점이각 → 진근점이각"""
    return eccentric_to_true(solve_kepler(M, e), e)


def true_to_eccentric(f: float, e: float) -> float:
    """진근점이각 → 이심 근점이각"""
    if e < CIRCULAR_ECCENTRICITY:
        return f
    return float(2 * np.arctan2(np.sqrt(1 - e) * np.sin(f / 2),
                                np.sqrt(1 + e) * np.cos(f / 2)))


def true_to_mean(f: float, e: float) -> float:
    """진근점이각 → 평균 근점이각"""
    E = true_to_eccentric(f, e)
    return float(E - e * np.sin(E))


@dataclass(frozen=True)
class OrbitalElements:
    """
    케플러 궤도 요소 (각도는 라디안)

    길이 단위는 생성기가 정한다 (위성 배치는 m, 소행성대는 AU).
    """

    a: float
    e: float
    i: float = 0.0
    raan: float = 0.0
    arg_periapsis: float = 0.0
    true_anomaly: float = 0.0

    def __post_init__(self):
        if not 0.0 <= self.e < 1.0:
            raise ValueError(f"eccentricity must be in [0, 1), got {self.e}")

    @classmethod
    def from_mean_anomaly(
        cls,
        a: float,
        e: float,
        i: float,
        raan: float,
        arg_periapsis: float,
        mean_anomaly: float,
    ) -> "OrbitalElements":
        """평균 근점이각으로부터 궤도 요소 생성"""
        return cls(a, e, i, raan, arg_periapsis, mean_to_true(mean_anomaly, e))

    @property
    def semi_latus_rectum(self) -> float:
        return self.a * (1 - self.e**2)

    @property
    def periapsis(self) -> float:
        return self.a * (1 - self.e)

    @property
    def apoapsis(self) -> float:
        return self.a * (1 + self.e)

    @property
    def mean_anomaly(self) -> float:
        return true_to_mean(self.true_anomaly, self.e)

    @property
    def radius(self) -> float:
        """현재 진근점이각에서의 궤도 반지름"""
        return self.semi_latus_rectum / (1 + self.e * np.cos(self.true_anomaly))

    def position(self, true_anomaly: Optional[float] = None) -> np.ndarray:
        """
        기준 좌표계 위치 벡터 (z축이 기준면의 법선)

        Args:
            true_anomaly: 지정하면 저장된 진근점이각 대신 사용
        """
        nu = self.true_anomaly if true_anomaly is None else true_anomaly
        return elements_to_position(self.a, self.e, self.i, self.raan, self.arg_periapsis, nu)

    def to_dict(self) -> dict:
        return {
            "a": self.a,
            "e": self.e,
            "i": self.i,
            "raan": self.raan,
            "arg_periapsis": self.arg_periapsis,
            "true_anomaly": self.true_anomaly,
        }
