# tests/test_moons.py
"""
위성 배치 생성기 테스트
"""

import pytest
import numpy as np
from config.settings import MoonPlacementConfig
from generation.moons import (
    MoonPlacementGenerator, PlanetSummary, SizeCategory,
    classify_planet_mass, classify_capture, planet_tier
)
from generation.random_stream import RandomStream
from generation.seeds import derive_indexed
from orbital_mechanics.physics import ParentContext
from utils.constants import MOON_COUNT_PARAMS


class TestClassification:
    """질량 등급 / 포획 판정 테스트"""

    @pytest.mark.parametrize("mass_earths, expected", [
        (317.8, "gas_giant"),
        (50.0, "gas_giant"),
        (17.1, "ice_giant"),
        (5.0, "super_earth"),
        (1.0, "terrestrial"),
        (0.107, "sub_terrestrial"),
        (0.002, "dwarf"),
        (0.0, "dwarf"),
    ])
    def test_classify_planet_mass(self, mass_earths, expected):
        assert classify_planet_mass(mass_earths) == expected

    def test_planet_tier(self):
        assert planet_tier("gas_giant") == "giant"
        assert planet_tier("ice_giant") == "ice_giant"
        assert planet_tier("terrestrial") == "rocky"
        assert planet_tier("dwarf") == "minor"

    def test_outer_zone_always_captured(self):
        """힐 반지름 40% 초과는 항상 포획 (난수 소비 없음)"""
        stream = RandomStream(1)
        reference = RandomStream(1)
        for fraction in [0.41, 0.6, 0.99]:
            assert classify_capture(fraction * 100.0, 100.0, stream)
        assert stream.uniform_float() == reference.uniform_float()

    def test_inner_zone_never_captured(self):
        stream = RandomStream(1)
        for fraction in [0.01, 0.1, 0.249]:
            assert not classify_capture(fraction * 100.0, 100.0, stream)

    def test_transition_zone_probability(self):
        """25~40% 구간은 약 30% 확률로 포획"""
        stream = RandomStream(5)
        captured = sum(classify_capture(30.0, 100.0, stream) for _ in range(4000))
        assert captured / 4000 == pytest.approx(0.30, abs=0.03)

    def test_zero_hill_radius(self, stream):
        assert not classify_capture(10.0, 0.0, stream)


class TestMoonPlacement:
    """위성 배치 테스트"""

    def setup_method(self):
        self.generator = MoonPlacementGenerator()
        self.context = ParentContext.from_solar_units(distance_au=5.2)
        self.jupiter = PlanetSummary.from_earth_units(317.8, 11.2, 5.2)

    def _place(self, seed, planet=None, context=None):
        return self.generator.place_moons(
            planet or self.jupiter, context or self.context, RandomStream(seed)
        )

    def test_deterministic(self):
        """같은 시드 → 같은 결과"""
        for seed in range(10):
            assert self._place(seed) == self._place(seed)

    def test_different_seeds_differ(self):
        results = {self._place(seed).distances for seed in range(20)}
        assert len(results) > 1

    def test_count_within_class_bounds(self):
        count_min, count_max, _ = MOON_COUNT_PARAMS["gas_giant"]
        for seed in range(100):
            count = self._place(seed).count
            assert count == 0 or count_min <= count <= count_max

    def test_gas_giants_usually_have_moons(self):
        with_moons = sum(self._place(seed).count > 0 for seed in range(100))
        assert with_moons >= 90

    def test_ordering_and_limits(self):
        """안쪽에서 바깥쪽 순, 배치 범위 안"""
        for seed in range(30):
            result = self._place(seed)
            distances = result.distances
            assert list(distances) == sorted(distances)
            assert [moon.index for moon in result] == list(range(result.count))
            for d in distances:
                assert result.inner_limit * (1 - 1e-9) <= d <= result.outer_limit * (1 + 1e-9)

    def test_hill_fraction_and_capture_consistency(self):
        for seed in range(30):
            result = self._place(seed)
            for moon in result:
                assert moon.hill_fraction == pytest.approx(moon.distance / result.hill_radius)
                if moon.hill_fraction < 0.25:
                    assert not moon.captured

    def test_captured_moons_are_never_large(self):
        for seed in range(200):
            for moon in self._place(seed):
                if moon.captured:
                    assert moon.size_category != SizeCategory.LARGE

    def test_moon_seeds_are_unique(self):
        for seed in range(20):
            seeds = [moon.seed for moon in self._place(seed)]
            assert len(seeds) == len(set(seeds))

    def test_result_metadata(self):
        result = self._place(3)
        assert result.seed == 3
        assert result.planet == self.jupiter
        assert result.mass_class == "gas_giant"
        assert result.generator_version
        assert result.inner_limit == pytest.approx(3.0 * self.jupiter.radius)
        assert result.outer_limit == pytest.approx(0.4 * result.hill_radius)
        assert len(result) == result.count

    def test_hill_sphere_below_inner_limit_yields_no_moons(self):
        """힐 반지름 ≤ 3R 이면 위성 없음"""
        close_in = PlanetSummary.from_earth_units(1.0, 1.0, 0.01)
        context = ParentContext.from_solar_units(distance_au=0.01)
        for seed in range(50):
            result = self._place(seed, close_in, context)
            assert result.hill_radius <= result.inner_limit
            assert result.count == 0

    def test_collapsed_placement_range_yields_no_moons(self):
        """3R < 힐 반지름 이지만 0.4 R_H ≤ 3R 이면 위성 없음"""
        planet = PlanetSummary.from_earth_units(1.0, 1.0, 0.02)
        context = ParentContext.from_solar_units(distance_au=0.02)
        for seed in range(50):
            result = self._place(seed, planet, context)
            assert result.hill_radius > result.inner_limit
            assert result.count == 0

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_non_positive_radius_yields_no_moons(self, radius):
        """반지름이 0 이하이면 위성 없음 (천체 생성기도 호출하지 않음)"""
        calls = []
        generator = MoonPlacementGenerator(body_generator=lambda *args: calls.append(args))
        planet = PlanetSummary(mass=self.jupiter.mass, radius=radius,
                               orbital_distance=self.jupiter.orbital_distance)
        for seed in range(20):
            result = generator.place_moons(planet, self.context, RandomStream(seed))
            assert result.count == 0
            assert result.distances == ()
        assert calls == []

    def test_result_seed_reproduces_placement(self):
        """새 스트림이면 결과의 seed로 같은 배치를 재현"""
        for seed in [derive_indexed(5, i) for i in range(5)]:
            result = self._place(seed)
            assert self._place(result.seed) == result


class TestPlacementSpacing:
    """로그 간격 배치 테스트"""

    def test_spacing_ratio_with_wide_slots(self):
        generator = MoonPlacementGenerator()
        for seed in range(50):
            distances = generator._place_distances(3, 1.0, 100.0, RandomStream(seed))
            ratios = np.array(distances[1:]) / np.array(distances[:-1])
            assert np.all(ratios >= 1.3)

    def test_count_preserved_when_retries_exhausted(self):
        """간격 조건을 만족할 수 없어도 개수는 유지"""
        generator = MoonPlacementGenerator(MoonPlacementConfig(min_spacing_ratio=100.0))
        distances = generator._place_distances(5, 1.0, 10.0, RandomStream(0))
        assert len(distances) == 5
        assert distances == sorted(distances)


class TestBodyGeneratorDelegation:
    """외부 천체 생성기 위임 테스트"""

    def test_body_generator_called_per_moon(self):
        calls = []

        def body_generator(seed, size_category, captured, context):
            calls.append((seed, size_category, captured, context))
            return {"seed": seed}

        jupiter = PlanetSummary.from_earth_units(317.8, 11.2, 5.2)
        star = ParentContext.from_solar_units(distance_au=5.2)
        generator = MoonPlacementGenerator(body_generator=body_generator)

        # 위성이 있는 시드를 찾는다
        for seed in range(20):
            result = generator.place_moons(jupiter, star, RandomStream(derive_indexed(seed, 0)))
            if result.count > 0:
                break
        assert result.count > 0
        assert len(calls) == result.count

        for moon, (seed, size_category, captured, context) in zip(result, calls):
            assert moon.seed == seed
            assert moon.size_category == size_category
            assert moon.captured == captured
            assert moon.body == {"seed": seed}
            assert context.has_parent_body()
            assert context.parent_body_mass == jupiter.mass
            assert context.parent_body_radius == jupiter.radius
            assert context.parent_body_distance == moon.distance
            assert context.orbital_distance == jupiter.orbital_distance
            assert context.star_mass == star.star_mass

    def test_body_generator_does_not_change_placement(self):
        """천체 생성기 유무와 관계없이 같은 배치"""
        jupiter = PlanetSummary.from_earth_units(317.8, 11.2, 5.2)
        star = ParentContext.from_solar_units(distance_au=5.2)
        plain = MoonPlacementGenerator().place_moons(jupiter, star, RandomStream(11))
        delegated = MoonPlacementGenerator(body_generator=lambda *args: object()).place_moons(
            jupiter, star, RandomStream(11)
        )
        assert plain == delegated
