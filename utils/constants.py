"""
물리 상수 및 생성기 파라미터 정의
"""

import numpy as np

# 물리 상수
G = 6.674e-11  # 만유인력 상수 (m^3/kg/s^2)
STEFAN_BOLTZMANN = 5.670374419e-8  # 슈테판-볼츠만 상수 (W/m^2/K^4)
AU = 1.495978707e11  # 천문단위 (m)

M_SUN = 1.98847e30  # 태양 질량 (kg)
L_SUN = 3.828e26  # 태양 광도 (W)
T_SUN = 5772.0  # 태양 유효 온도 (K)
M_EARTH = 5.9722e24  # 지구 질량 (kg)
R_EARTH = 6.371e6  # 지구 평균 반지름 (m)

# 수치 허용 오차
CIRCULAR_ECCENTRICITY = 1e-10  # 이 값보다 작은 이심률은 원궤도로 취급
KEPLER_TOLERANCE = 1e-10
KEPLER_MAX_ITER = 50
POWER_LAW_UNITY_TOLERANCE = 1e-6  # 멱법칙 지수가 1에 이만큼 가까우면 로그 균등 분포 사용

# 시드 관련
SEED_MASK = 0xFFFFFFFF  # 파생 시드는 음이 아닌 32비트 정수
GENERATOR_VERSION = "1.0.0"

# 위성 개수 파라미터: 질량 등급별 (최소, 최대, 위성 보유 확률)
# 질량 하한은 지구 질량 단위
PLANET_MASS_BANDS = [
    ("gas_giant", 50.0),
    ("ice_giant", 10.0),
    ("super_earth", 2.0),
    ("terrestrial", 0.3),
    ("sub_terrestrial", 0.01),
    ("dwarf", 0.0),
]

MOON_COUNT_PARAMS = {
    "gas_giant": (2, 8, 0.98),
    "ice_giant": (1, 6, 0.90),
    "super_earth": (1, 3, 0.50),
    "terrestrial": (1, 2, 0.35),
    "sub_terrestrial": (1, 2, 0.20),
    "dwarf": (1, 3, 0.15),
}

# 6개 질량 등급을 4개 행성 계층으로 축약
PLANET_TIERS = {
    "gas_giant": "giant",
    "ice_giant": "ice_giant",
    "super_earth": "rocky",
    "terrestrial": "rocky",
    "sub_terrestrial": "minor",
    "dwarf": "minor",
}

# 위성 크기 가중치 (tiny, small, medium, large 순)
CAPTURED_MOON_SIZE_WEIGHTS = (80.0, 18.0, 2.0, 0.0)

REGULAR_MOON_SIZE_WEIGHTS = {
    "giant": (25.0, 35.0, 28.0, 12.0),
    "ice_giant": (35.0, 38.0, 22.0, 5.0),
    "rocky": (50.0, 35.0, 13.0, 2.0),
    "minor": (70.0, 25.0, 5.0, 0.0),
}

# 위성 배치 파라미터
MOON_PLACEMENT_PARAMS = {
    "inner_limit_radii": 3.0,  # 최내곽 궤도 (행성 반지름 단위)
    "outer_hill_fraction": 0.40,  # 최외곽 궤도 (힐 반지름 비율)
    "capture_inner_fraction": 0.25,  # 이 비율 이상부터 포획 가능
    "capture_outer_fraction": 0.40,  # 이 비율 초과는 항상 포획
    "capture_probability": 0.30,  # 중간 영역의 포획 확률
    "min_spacing_ratio": 1.3,  # 인접 위성 간 최소 거리 비
    "jitter_fraction": 0.30,  # 슬롯 폭 대비 지터 크기
    "max_spacing_attempts": 10,
    "count_bias_exponent": 0.7,
    "fraction_min": 0.05,
    "fraction_max": 0.95,
}

# 소행성대 기본 파라미터 (주 소행성대 유사, 커크우드 간극 포함)
ASTEROID_BELT_PARAMS = {
    "inner_radius": 2.1,  # (AU)
    "outer_radius": 3.3,  # (AU)
    "asteroid_count": 500,
    "max_inclination_deg": 20.0,
    "max_eccentricity": 0.25,
    "min_body_radius": 0.5,  # (km)
    "max_body_radius": 250.0,  # (km)
    "size_power_law_exponent": 2.5,
    "radial_concentration": 1.5,
    "gap_centers": [2.50, 2.82, 2.95],  # (AU)
    "gap_half_widths": [0.03, 0.02, 0.02],  # (AU)
    "cluster_longitudes_deg": [],
    "cluster_concentrations": [],
    "cluster_fraction": 0.0,
    "max_sampling_attempts": 1000,
}

# 로깅 설정
LOGGING_PARAMS = {
    "logger_name": "orbit_gen",
    "level": "INFO",
    "log_file": None,
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}

# 각도 변환
DEG_TO_RAD = np.pi / 180.0
RAD_TO_DEG = 180.0 / np.pi
TWO_PI = 2.0 * np.pi
