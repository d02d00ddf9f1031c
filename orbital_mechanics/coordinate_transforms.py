"""
궤도 요소 → 위치 벡터 변환 함수들

출력 좌표계: 오른손 좌표계 (x, y, z). 기준면은 x-y 평면이며
z축이 "위" 방향(기준면/고리면의 법선)이다.
"""

import numpy as np


def perifocal_position(a: float, e: float, true_anomaly: float) -> np.ndarray:
    """
    궤도면(페리포컬 좌표계) 내 위치 계산

    Args:
        a: 반장축
        e: 이심률
        true_anomaly: 진근점이각 [rad]

    Returns:
        [x, y, 0] (x축은 근점 방향)
    """
    r_mag = a * (1 - e**2) / (1 + e * np.cos(true_anomaly))
    return np.array([r_mag * np.cos(true_anomaly), r_mag * np.sin(true_anomaly), 0.0])


def compute_rotation_matrix(RAAN: float, i: float, omega: float) -> np.ndarray:
    """
    페리포컬 좌표계에서 기준 좌표계로의 회전 행렬 계산

    3-1-3 오일러 회전 Rz(RAAN) @ Rx(i) @ Rz(omega)

    Args:
        RAAN: 승교점 경도 [rad]
        i: 경사각 [rad]
        omega: 근점 편각 [rad]

    Returns:
        3x3 회전 행렬
    """
    cos_RAAN, sin_RAAN = np.cos(RAAN), np.sin(RAAN)
    cos_i, sin_i = np.cos(i), np.sin(i)
    cos_omega, sin_omega = np.cos(omega), np.sin(omega)

    # 회전 행렬 계산
    R11 = cos_RAAN * cos_omega - sin_RAAN * sin_omega * cos_i
    R12 = -cos_RAAN * sin_omega - sin_RAAN * cos_omega * cos_i
    R13 = sin_RAAN * sin_i

    R21 = sin_RAAN * cos_omega + cos_RAAN * sin_omega * cos_i
    R22 = -sin_RAAN * sin_omega + cos_RAAN * cos_omega * cos_i
    R23 = -cos_RAAN * sin_i

    R31 = sin_omega * sin_i
    R32 = cos_omega * sin_i
    R33 = cos_i

    return np.array([
        [R11, R12, R13],
        [R21, R22, R23],
        [R31, R32, R33]
    ])


def elements_to_position(a: float, e: float, i: float, RAAN: float,
                         omega: float, true_anomaly: float) -> np.ndarray:
    """
    궤도 요소에서 위치 벡터로 변환

    Args:
        a: 반장축
        e: 이심률
        i: 경사각 [rad]
        RAAN: 승교점 경도 [rad]
        omega: 근점 편각 [rad]
        true_anomaly: 진근점이각 [rad]

    Returns:
        위치 벡터 [x, y, z] (반장축과 같은 길이 단위)
    """
    r_orbit = perifocal_position(a, e, true_anomaly)
    R = compute_rotation_matrix(RAAN, i, omega)
    return R @ r_orbit


def vertical_component(position: np.ndarray) -> float:
    """기준면으로부터의 높이 (z 성분)"""
    return float(position[2])


def horizontal_distance(position: np.ndarray) -> float:
    """기준면 투영 거리"""
    return float(np.hypot(position[0], position[1]))


def ecliptic_longitude(position: np.ndarray) -> float:
    """기준면 투영 경도 [0, 2π)"""
    return float(np.arctan2(position[1], position[0]) % (2 * np.pi))
