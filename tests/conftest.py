# tests/conftest.py
"""
pytest 설정 파일
"""

import pytest

from generation.asteroid_belt import AsteroidBeltSpec
from generation.random_stream import RandomStream


@pytest.fixture
def stream():
    """고정 시드 난수 스트림"""
    return RandomStream(42)


@pytest.fixture
def gapped_belt_spec():
    """간극이 두 개 있는 소행성대"""
    return AsteroidBeltSpec(
        inner_radius=2.0,
        outer_radius=3.5,
        asteroid_count=500,
        max_inclination_deg=15.0,
        max_eccentricity=0.2,
        min_body_radius=1.0,
        max_body_radius=100.0,
        size_power_law_exponent=2.5,
        radial_concentration=1.0,
        gap_centers=[2.5, 3.0],
        gap_half_widths=[0.1, 0.08],
    )
