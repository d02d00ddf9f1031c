# tests/test_asteroid_belt.py
"""
소행성대 생성기 테스트
"""

import logging

import pytest
import numpy as np
from scipy import stats
from config.settings import AsteroidBeltConfig
from generation.asteroid_belt import (
    AsteroidBeltGenerator, AsteroidBeltSpec, MajorBodyInput,
    sample_power_law, radial_density
)
from generation.random_stream import RandomStream
from utils.constants import AU


def wrapped_difference(angle, reference):
    """두 각도의 차이를 [-π, π) 로 래핑"""
    return (angle - reference + np.pi) % (2 * np.pi) - np.pi


def power_law_cdf(r, exponent, lo, hi):
    """p(r) ∝ r^-exponent 의 누적 분포"""
    p = 1.0 - exponent
    return (np.asarray(r) ** p - lo ** p) / (hi ** p - lo ** p)


CERES = MajorBodyInput(
    body_id="ceres",
    semi_major_axis_m=2.7675 * AU,
    eccentricity=0.0758,
    inclination_deg=10.59,
    longitude_ascending_node_deg=80.3,
    argument_periapsis_deg=73.6,
    mean_anomaly_deg=95.99,
    radius_km=473.0,
    body_type="dwarf_planet",
)


class TestSamplingHelpers:
    """샘플링 보조 함수 테스트"""

    def test_power_law_bounds(self):
        assert sample_power_law(0.0, 2.5, 1.0, 100.0) == pytest.approx(1.0)
        assert sample_power_law(1.0, 2.5, 1.0, 100.0) == pytest.approx(100.0)

    def test_power_law_unit_exponent_is_log_uniform(self):
        assert sample_power_law(0.5, 1.0, 1.0, 100.0) == pytest.approx(10.0)

    def test_power_law_monotonic(self):
        values = [sample_power_law(u, 2.5, 0.5, 250.0) for u in np.linspace(0, 1, 11)]
        assert values == sorted(values)

    def test_radial_density_shape(self):
        assert radial_density(0.5, 0.0) == 1.0
        assert radial_density(0.1, 0.0) == 1.0
        assert radial_density(0.5, 2.0) > radial_density(0.2, 2.0) > radial_density(0.05, 2.0)


class TestAsteroidBeltSpec:
    """소행성대 명세 검증 테스트"""

    def test_lists_become_tuples(self, gapped_belt_spec):
        assert gapped_belt_spec.gap_centers == (2.5, 3.0)
        assert gapped_belt_spec.gaps == ((2.5, 0.1), (3.0, 0.08))

    def test_in_gap_inclusive(self, gapped_belt_spec):
        assert gapped_belt_spec.in_gap(2.5)
        assert gapped_belt_spec.in_gap(2.45)
        assert gapped_belt_spec.in_gap(3.05)
        assert not gapped_belt_spec.in_gap(2.7)

    @pytest.mark.parametrize("overrides", [
        {"outer_radius": 2.0},
        {"asteroid_count": -1},
        {"max_eccentricity": 1.0},
        {"min_body_radius": 0.0},
        {"max_body_radius": 0.1},
        {"gap_centers": [2.5], "gap_half_widths": []},
        {"cluster_longitudes_deg": [60.0], "cluster_concentrations": []},
    ])
    def test_invalid_spec_rejected(self, overrides):
        values = dict(inner_radius=2.0, outer_radius=3.0, asteroid_count=10)
        values.update(overrides)
        with pytest.raises(ValueError):
            AsteroidBeltSpec(**values)

    def test_from_config_defaults(self):
        spec = AsteroidBeltSpec.from_config(AsteroidBeltConfig(), major_bodies=[CERES])
        assert spec.inner_radius == pytest.approx(2.1)
        assert spec.outer_radius == pytest.approx(3.3)
        assert len(spec.gaps) == 3
        assert spec.major_bodies == (CERES,)

    def test_dict_round_trip(self, gapped_belt_spec):
        spec = AsteroidBeltSpec.from_dict({**gapped_belt_spec.to_dict(), "major_bodies": [CERES.__dict__]})
        assert spec.major_bodies == (CERES,)
        assert spec.gaps == gapped_belt_spec.gaps


class TestAsteroidBeltGenerator:
    """소행성대 생성 테스트"""

    def setup_method(self):
        self.generator = AsteroidBeltGenerator()

    def test_gaps_are_avoided(self, gapped_belt_spec):
        """간극 안에 배경 천체가 없어야 함"""
        result = self.generator.generate(gapped_belt_spec, RandomStream(42))
        assert result.fallback_count == 0
        for body in result.background_bodies:
            assert gapped_belt_spec.inner_radius <= body.elements.a < gapped_belt_spec.outer_radius
            assert not gapped_belt_spec.in_gap(body.elements.a)

    def test_element_bounds(self, gapped_belt_spec):
        result = self.generator.generate(gapped_belt_spec, RandomStream(42))
        max_incl = np.radians(gapped_belt_spec.max_inclination_deg)
        for body in result.background_bodies:
            assert 0.0 <= body.elements.e < gapped_belt_spec.max_eccentricity
            assert 0.0 <= body.elements.i <= max_incl
            assert 1.0 - 1e-9 <= body.radius <= 100.0 + 1e-9
            assert not body.is_major
            assert body.body_id == ""

    def test_body_counts(self):
        spec = AsteroidBeltSpec(inner_radius=2.0, outer_radius=3.3, asteroid_count=200, major_bodies=[CERES])
        result = self.generator.generate(spec, RandomStream(1))
        assert len(result) == 201
        assert len(result.background_bodies) == 200
        assert len(result.major_bodies) == 1
        assert result.positions().shape == (201, 3)

    def test_major_body_retained(self):
        spec = AsteroidBeltSpec(inner_radius=2.0, outer_radius=3.3, asteroid_count=50, major_bodies=[CERES])
        result = self.generator.generate(spec, RandomStream(1))
        ceres = result.find("ceres")
        assert ceres is not None
        assert ceres.is_major
        assert ceres.radius == 473.0
        assert ceres.body_type == "dwarf_planet"
        assert ceres.elements.a == pytest.approx(2.7675)
        assert ceres.elements.i == pytest.approx(np.radians(10.59))
        assert np.linalg.norm(ceres.position) == pytest.approx(ceres.elements.radius)
        assert result.find("vesta") is None

    def test_major_bodies_consume_no_draws(self):
        """주요 천체 유무와 관계없이 배경 천체가 동일"""
        plain = AsteroidBeltSpec(inner_radius=2.0, outer_radius=3.3, asteroid_count=100)
        with_major = AsteroidBeltSpec(inner_radius=2.0, outer_radius=3.3, asteroid_count=100, major_bodies=[CERES])
        a = self.generator.generate(plain, RandomStream(9))
        b = self.generator.generate(with_major, RandomStream(9))
        assert a.background_bodies == b.background_bodies

    def test_deterministic(self, gapped_belt_spec):
        a = self.generator.generate(gapped_belt_spec, RandomStream(123))
        b = self.generator.generate(gapped_belt_spec, RandomStream(123))
        assert np.array_equal(a.positions(), b.positions())
        assert a.bodies == b.bodies

    def test_different_seeds_differ(self, gapped_belt_spec):
        a = self.generator.generate(gapped_belt_spec, RandomStream(1))
        b = self.generator.generate(gapped_belt_spec, RandomStream(2))
        assert not np.array_equal(a.positions(), b.positions())

    def test_size_distribution_skews_small(self):
        """멱법칙 지수 2.5 → 대부분 중앙값 반지름 미만"""
        spec = AsteroidBeltSpec(inner_radius=2.0, outer_radius=3.0, asteroid_count=1000,
                                min_body_radius=1.0, max_body_radius=100.0, size_power_law_exponent=2.5)
        radii = np.array([body.radius for body in self.generator.generate(spec, RandomStream(5)).bodies])
        assert np.mean(radii < 50.5) > 0.8

    def test_size_distribution_matches_power_law(self):
        spec = AsteroidBeltSpec(inner_radius=2.0, outer_radius=3.0, asteroid_count=2000,
                                min_body_radius=0.5, max_body_radius=250.0, size_power_law_exponent=2.5)
        radii = [body.radius for body in self.generator.generate(spec, RandomStream(17)).bodies]
        result = stats.kstest(radii, lambda r: power_law_cdf(r, 2.5, 0.5, 250.0))
        assert result.pvalue > 0.001

    def test_uniform_radial_distribution_without_concentration(self):
        spec = AsteroidBeltSpec(inner_radius=2.0, outer_radius=3.5, asteroid_count=2000)
        a = [body.elements.a for body in self.generator.generate(spec, RandomStream(21)).bodies]
        result = stats.kstest(a, "uniform", args=(2.0, 1.5))
        assert result.pvalue > 0.001

    def test_radial_concentration_narrows_belt(self):
        flat = AsteroidBeltSpec(inner_radius=2.0, outer_radius=3.5, asteroid_count=2000)
        peaked = AsteroidBeltSpec(inner_radius=2.0, outer_radius=3.5, asteroid_count=2000,
                                  radial_concentration=4.0)
        a_flat = np.array([b.elements.a for b in self.generator.generate(flat, RandomStream(4)).bodies])
        a_peaked = np.array([b.elements.a for b in self.generator.generate(peaked, RandomStream(4)).bodies])
        assert np.std(a_peaked) < 0.3
        assert np.std(a_peaked) < np.std(a_flat)
        assert abs(np.mean(a_peaked) - 2.75) < 0.05

    def test_longitude_clustering(self):
        """경사각 0, 모든 천체 군집 → 위치 경도가 군집 중심 근처"""
        spec = AsteroidBeltSpec(
            inner_radius=5.0, outer_radius=5.4, asteroid_count=500,
            max_inclination_deg=0.0, max_eccentricity=0.05,
            cluster_longitudes_deg=[60.0], cluster_concentrations=[400.0], cluster_fraction=1.0,
        )
        result = self.generator.generate(spec, RandomStream(8))
        center = np.radians(60.0)
        for body in result.bodies:
            x, y, z = body.position
            assert abs(z) < 1e-9
            assert abs(wrapped_difference(np.arctan2(y, x), center)) < 0.3

    def test_unclustered_longitudes_spread(self):
        spec = AsteroidBeltSpec(inner_radius=2.0, outer_radius=3.0, asteroid_count=1000,
                                max_inclination_deg=0.0)
        result = self.generator.generate(spec, RandomStream(8))
        longitudes = np.array([np.arctan2(b.position[1], b.position[0]) for b in result.bodies])
        # 4개 사분면에 고르게 분포
        counts = np.histogram(longitudes, bins=4, range=(-np.pi, np.pi))[0]
        assert np.all(counts > 180)

    def test_fully_gapped_belt_falls_back_to_midpoint(self, caplog):
        """간극이 소행성대 전체를 덮으면 중앙값으로 대체"""
        spec = AsteroidBeltSpec(inner_radius=2.0, outer_radius=3.0, asteroid_count=20,
                                gap_centers=[2.5], gap_half_widths=[0.6])
        generator = AsteroidBeltGenerator(AsteroidBeltConfig(max_sampling_attempts=25))
        with caplog.at_level(logging.WARNING):
            result = generator.generate(spec, RandomStream(3))
        assert result.fallback_count == 20
        for body in result.bodies:
            assert body.elements.a == pytest.approx(2.5)
        assert any("midpoint" in record.getMessage() for record in caplog.records)

    def test_extreme_radial_concentration(self):
        """매우 큰 집중도에서도 예외 없이 중앙 부근에 배치"""
        spec = AsteroidBeltSpec(inner_radius=2.0, outer_radius=3.0, asteroid_count=5,
                                radial_concentration=600.0)
        result = self.generator.generate(spec, RandomStream(1))
        assert len(result.background_bodies) == 5
        for body in result.background_bodies:
            assert np.isfinite(body.elements.a)
            assert abs(body.elements.a - 2.5) < 0.1

    def test_result_seed_reproduces_belt(self, gapped_belt_spec):
        """새 스트림이면 결과의 seed로 같은 소행성대를 재현"""
        result = self.generator.generate(gapped_belt_spec, RandomStream(77))
        replay = self.generator.generate(gapped_belt_spec, RandomStream(result.seed))
        assert replay.bodies == result.bodies

    def test_empty_belt(self):
        spec = AsteroidBeltSpec(inner_radius=2.0, outer_radius=3.0, asteroid_count=0)
        result = self.generator.generate(spec, RandomStream(0))
        assert len(result) == 0
        assert result.positions().shape == (0, 3)
