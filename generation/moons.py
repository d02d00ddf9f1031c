"""
위성 배치 생성기

행성의 질량/반지름/궤도 거리와 항성 정보, 난수 스트림으로부터
위성 개수, 궤도 거리, 포획 여부, 크기 등급을 결정한다.
위성 천체 자체의 물리 속성 생성은 외부 body_generator에 위임한다.
"""

import numpy as np
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterator, List, Optional, Tuple

from config.settings import MoonPlacementConfig
from generation.random_stream import RandomStream
from orbital_mechanics.physics import ParentContext, hill_sphere_radius
from utils.constants import (
    AU,
    M_EARTH,
    R_EARTH,
    GENERATOR_VERSION,
    PLANET_MASS_BANDS,
    MOON_COUNT_PARAMS,
    PLANET_TIERS,
    CAPTURED_MOON_SIZE_WEIGHTS,
    REGULAR_MOON_SIZE_WEIGHTS,
)
from utils.helpers import clamp, get_logger

logger = get_logger(__name__)


class SizeCategory(str, Enum):
    """위성 크기 등급 (작은 것부터)"""

    TINY = "tiny"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


SIZE_CATEGORIES = (SizeCategory.TINY, SizeCategory.SMALL, SizeCategory.MEDIUM, SizeCategory.LARGE)

# (seed, size_category, captured, parent_context) -> 불투명한 천체 핸들
BodyGenerator = Callable[[int, SizeCategory, bool, ParentContext], Any]


@dataclass(frozen=True)
class PlanetSummary:
    """위성 배치에 필요한 행성 요약 정보"""

    mass: float  # [kg]
    radius: float  # [m]
    orbital_distance: float  # 항성으로부터의 거리 [m]

    @classmethod
    def from_earth_units(cls, mass_earths: float, radius_earths: float, distance_au: float) -> "PlanetSummary":
        return cls(mass_earths * M_EARTH, radius_earths * R_EARTH, distance_au * AU)

    @property
    def mass_earths(self) -> float:
        return self.mass / M_EARTH


@dataclass(frozen=True)
class MoonRecord:
    """배치된 위성 하나"""

    index: int  # 안쪽부터 0
    distance: float  # 행성 중심으로부터의 궤도 거리 [m]
    captured: bool
    size_category: SizeCategory
    seed: int
    hill_fraction: float  # distance / 힐 반지름
    body: Any = field(default=None, compare=False)


@dataclass(frozen=True)
class MoonPlacementResult:
    """
    행성 하나에 대한 위성 배치 결과 (안쪽에서 바깥쪽 순)

    seed는 place_moons에 넘긴 스트림의 초기 시드다. 새 스트림으로 호출했다면
    seed와 planet, generator_version만 있으면 같은 결과를 재현할 수 있다.
    """

    moons: Tuple[MoonRecord, ...]
    seed: int
    planet: PlanetSummary
    mass_class: str
    hill_radius: float
    inner_limit: float
    outer_limit: float
    generator_version: str = GENERATOR_VERSION

    @property
    def count(self) -> int:
        return len(self.moons)

    @property
    def distances(self) -> Tuple[float, ...]:
        return tuple(moon.distance for moon in self.moons)

    @property
    def captured_count(self) -> int:
        return sum(1 for moon in self.moons if moon.captured)

    def __len__(self) -> int:
        return len(self.moons)

    def __iter__(self) -> Iterator[MoonRecord]:
        return iter(self.moons)


def classify_planet_mass(mass_earths: float) -> str:
    """
    지구 질량 단위 질량을 6개 등급 중 하나로 분류

    gas_giant ≥50, ice_giant ≥10, super_earth ≥2, terrestrial ≥0.3,
    sub_terrestrial ≥0.01, 그 미만은 dwarf
    """
    for mass_class, lower_bound in PLANET_MASS_BANDS:
        if mass_earths >= lower_bound:
            return mass_class
    return PLANET_MASS_BANDS[-1][0]


def planet_tier(mass_class: str) -> str:
    """6개 질량 등급을 위성 크기 표의 4개 계층으로 축약"""
    return PLANET_TIERS[mass_class]


def classify_capture(
    distance: float,
    hill_radius: float,
    stream: RandomStream,
    config: Optional[MoonPlacementConfig] = None,
) -> bool:
    """
    궤도 거리로 포획 위성 여부 판정

    힐 반지름의 40% 초과는 항상 포획, 25~40%는 30% 확률로 포획,
    25% 미만은 항상 규칙 위성. 중간 영역에서만 난수를 소비한다.
    """
    config = config or MoonPlacementConfig()
    if hill_radius <= 0:
        return False

    fraction = distance / hill_radius
    if fraction > config.capture_outer_fraction:
        return True
    if fraction >= config.capture_inner_fraction:
        return stream.uniform_float() < config.capture_probability
    return False


class MoonPlacementGenerator:
    """행성 하나의 위성 배치 생성기"""

    def __init__(
        self,
        config: Optional[MoonPlacementConfig] = None,
        body_generator: Optional[BodyGenerator] = None,
    ):
        self.config = config or MoonPlacementConfig()
        self.body_generator = body_generator

    def place_moons(
        self,
        planet: PlanetSummary,
        context: ParentContext,
        stream: RandomStream,
    ) -> MoonPlacementResult:
        """
        위성 배치 실행

        Args:
            planet: 행성 요약 정보
            context: 항성 정보 (위성 생성 시 모체 천체 정보를 덮어써서 전달)
            stream: 이 행성 전용 난수 스트림. 아직 한 번도 뽑지 않은 새 스트림이어야
                결과의 seed로 같은 배치를 재현할 수 있다.

        Returns:
            위성 배치 결과 (위성이 없으면 빈 결과)
        """
        cfg = self.config
        mass_class = classify_planet_mass(planet.mass_earths)
        hill_radius = hill_sphere_radius(planet.mass, context.star_mass, planet.orbital_distance)
        inner_limit = cfg.inner_limit_radii * planet.radius
        outer_limit = cfg.outer_hill_fraction * hill_radius

        def _result(moons: Tuple[MoonRecord, ...]) -> MoonPlacementResult:
            return MoonPlacementResult(
                moons=moons,
                seed=stream.seed,
                planet=planet,
                mass_class=mass_class,
                hill_radius=hill_radius,
                inner_limit=inner_limit,
                outer_limit=outer_limit,
            )

        count = self._draw_count(mass_class, stream)
        if count == 0:
            logger.debug("No moons for %s planet (seed=%d)", mass_class, stream.seed)
            return _result(())

        # 반지름이 0 이하이면 배치 범위가 정의되지 않는다
        if planet.radius <= 0:
            logger.debug("Non-positive planet radius %.3e m, no moons placed", planet.radius)
            return _result(())

        # 힐 구가 너무 작으면 안정 궤도가 없다
        if hill_radius <= inner_limit or outer_limit <= inner_limit:
            logger.debug(
                "Hill sphere too small for moons: hill=%.3e m, inner limit=%.3e m",
                hill_radius, inner_limit,
            )
            return _result(())

        distances = self._place_distances(count, inner_limit, outer_limit, stream)
        tier = planet_tier(mass_class)

        moons: List[MoonRecord] = []
        for index, distance in enumerate(distances):
            captured = classify_capture(distance, hill_radius, stream, cfg)
            size_category = self._draw_size(captured, tier, stream)
            moon_seed = stream.next_seed()

            body = None
            if self.body_generator is not None:
                moon_context = context.for_satellite_of(
                    planet.mass, planet.radius, distance, orbital_distance=planet.orbital_distance
                )
                body = self.body_generator(moon_seed, size_category, captured, moon_context)

            moons.append(MoonRecord(
                index=index,
                distance=distance,
                captured=captured,
                size_category=size_category,
                seed=moon_seed,
                hill_fraction=distance / hill_radius,
                body=body,
            ))

        logger.info(
            "Placed %d moons (%d captured) around %s planet (seed=%d)",
            len(moons), sum(m.captured for m in moons), mass_class, stream.seed,
        )
        return _result(tuple(moons))

    def _draw_count(self, mass_class: str, stream: RandomStream) -> int:
        """질량 등급별 위성 개수 추첨"""
        count_min, count_max, probability = MOON_COUNT_PARAMS[mass_class]
        if stream.uniform_float() >= probability:
            return 0
        bias = stream.uniform_float() ** self.config.count_bias_exponent
        return min(count_max, count_min + int(bias * (count_max - count_min) + 0.5))

    def _place_distances(
        self,
        count: int,
        inner_limit: float,
        outer_limit: float,
        stream: RandomStream,
    ) -> List[float]:
        """
        로그 균등 간격 배치

        슬롯마다 지터를 주고, 이미 배치된 위성과의 거리 비가
        min_spacing_ratio 미만이면 다시 뽑는다. 시도 횟수를 모두 쓰면
        마지막 후보를 그대로 사용한다.
        """
        cfg = self.config
        log_inner = np.log(inner_limit)
        log_span = np.log(outer_limit) - log_inner
        slot = 1.0 / count
        attempts = max(1, cfg.max_spacing_attempts)

        placed: List[float] = []
        for i in range(count):
            base = (i + 0.5) * slot
            for _ in range(attempts):
                jitter = stream.uniform_float_range(-cfg.jitter_fraction, cfg.jitter_fraction) * slot
                fraction = clamp(base + jitter, cfg.fraction_min, cfg.fraction_max)
                candidate = float(np.exp(log_inner + fraction * log_span))
                if all(_spacing_ratio(candidate, d) >= cfg.min_spacing_ratio for d in placed):
                    break
            else:
                logger.debug("Moon %d: spacing retries exhausted, keeping last candidate", i)
            placed.append(candidate)

        return sorted(placed)

    def _draw_size(self, captured: bool, tier: str, stream: RandomStream) -> SizeCategory:
        weights = CAPTURED_MOON_SIZE_WEIGHTS if captured else REGULAR_MOON_SIZE_WEIGHTS[tier]
        return stream.weighted_choice(SIZE_CATEGORIES, weights)


def _spacing_ratio(d1: float, d2: float) -> float:
    return max(d1, d2) / min(d1, d2)
