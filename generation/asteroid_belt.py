"""
소행성대 생성기

명세(AsteroidBeltSpec)와 난수 스트림으로부터 이름 없는 배경 소행성들과
명시적으로 지정된 주요 천체들을 생성한다. 길이 단위는 AU, 천체 반지름은 km.
"""

import numpy as np
from dataclasses import dataclass, fields
from typing import Any, Dict, Iterable, Optional, Tuple

from config.settings import AsteroidBeltConfig
from generation.random_stream import RandomStream
from orbital_mechanics.coordinate_transforms import elements_to_position
from orbital_mechanics.orbit import OrbitalElements, mean_to_true
from utils.constants import AU, DEG_TO_RAD, GENERATOR_VERSION, POWER_LAW_UNITY_TOLERANCE
from utils.helpers import get_logger, normalize_angle

logger = get_logger(__name__)


@dataclass(frozen=True)
class MajorBodyInput:
    """
    위치가 정해진 주요 천체 입력 (관용 단위)

    semi_major_axis_m은 m, 각도는 모두 도(degree), radius_km은 km.
    """

    body_id: str
    semi_major_axis_m: float
    eccentricity: float = 0.0
    inclination_deg: float = 0.0
    longitude_ascending_node_deg: float = 0.0
    argument_periapsis_deg: float = 0.0
    mean_anomaly_deg: float = 0.0
    radius_km: float = 0.0
    body_type: str = ""

    def to_elements(self) -> OrbitalElements:
        """AU/라디안 궤도 요소로 변환 (평균 근점이각 → 진근점이각)"""
        e = self.eccentricity
        return OrbitalElements(
            a=self.semi_major_axis_m / AU,
            e=e,
            i=self.inclination_deg * DEG_TO_RAD,
            raan=self.longitude_ascending_node_deg * DEG_TO_RAD,
            arg_periapsis=self.argument_periapsis_deg * DEG_TO_RAD,
            true_anomaly=mean_to_true(self.mean_anomaly_deg * DEG_TO_RAD, e),
        )


@dataclass(frozen=True)
class AsteroidBeltSpec:
    """소행성대 명세"""

    inner_radius: float  # [AU]
    outer_radius: float  # [AU]
    asteroid_count: int
    max_inclination_deg: float = 10.0
    max_eccentricity: float = 0.2
    min_body_radius: float = 0.5  # [km]
    max_body_radius: float = 100.0  # [km]
    size_power_law_exponent: float = 2.5
    radial_concentration: float = 0.0
    gap_centers: Tuple[float, ...] = ()
    gap_half_widths: Tuple[float, ...] = ()
    cluster_longitudes_deg: Tuple[float, ...] = ()
    cluster_concentrations: Tuple[float, ...] = ()
    cluster_fraction: float = 0.0
    major_bodies: Tuple[MajorBodyInput, ...] = ()

    def __post_init__(self):
        # 리스트로 넘어와도 불변 튜플로 보관
        for name in ("gap_centers", "gap_half_widths", "cluster_longitudes_deg",
                     "cluster_concentrations", "major_bodies"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

        if self.outer_radius <= self.inner_radius:
            raise ValueError("outer_radius must be greater than inner_radius")
        if self.asteroid_count < 0:
            raise ValueError("asteroid_count must be non-negative")
        if not 0.0 <= self.max_eccentricity < 1.0:
            raise ValueError("max_eccentricity must be in [0, 1)")
        if self.min_body_radius <= 0 or self.max_body_radius < self.min_body_radius:
            raise ValueError("body radius bounds must satisfy 0 < min_body_radius <= max_body_radius")
        if len(self.gap_centers) != len(self.gap_half_widths):
            raise ValueError("gap_centers and gap_half_widths must have the same length")
        if len(self.cluster_longitudes_deg) != len(self.cluster_concentrations):
            raise ValueError("cluster_longitudes_deg and cluster_concentrations must have the same length")

    @property
    def midpoint(self) -> float:
        return 0.5 * (self.inner_radius + self.outer_radius)

    @property
    def gaps(self) -> Tuple[Tuple[float, float], ...]:
        return tuple(zip(self.gap_centers, self.gap_half_widths))

    @property
    def has_clusters(self) -> bool:
        return len(self.cluster_longitudes_deg) > 0 and self.cluster_fraction > 0

    def in_gap(self, radius: float) -> bool:
        """반지름이 간극 (center ± half_width, 경계 포함) 안에 있는지"""
        return any(abs(radius - center) <= half_width for center, half_width in self.gaps)

    @classmethod
    def from_config(
        cls,
        config: AsteroidBeltConfig,
        major_bodies: Iterable[MajorBodyInput] = (),
    ) -> "AsteroidBeltSpec":
        """설정 객체로부터 명세 생성 (샘플러 설정은 제외)"""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in config.__dict__.items() if k in known}
        return cls(major_bodies=tuple(major_bodies), **values)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AsteroidBeltSpec":
        values = dict(data)
        values["major_bodies"] = tuple(
            body if isinstance(body, MajorBodyInput) else MajorBodyInput(**body)
            for body in values.get("major_bodies", ())
        )
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        for name in ("gap_centers", "gap_half_widths", "cluster_longitudes_deg", "cluster_concentrations"):
            data[name] = list(data[name])
        data["major_bodies"] = [body.__dict__.copy() for body in self.major_bodies]
        return data


@dataclass(frozen=True)
class AsteroidBody:
    """
    소행성대 천체 하나

    배경 천체는 body_id/body_type이 빈 문자열이다.
    """

    position: Tuple[float, float, float]  # [AU], z축이 위
    elements: OrbitalElements
    radius: float  # [km]
    is_major: bool = False
    body_id: str = ""
    body_type: str = ""


@dataclass(frozen=True)
class AsteroidBeltResult:
    """소행성대 생성 결과"""

    bodies: Tuple[AsteroidBody, ...]
    seed: int  # generate에 넘긴 스트림의 초기 시드
    spec: AsteroidBeltSpec
    generator_version: str = GENERATOR_VERSION
    fallback_count: int = 0  # 기각 샘플링 한도 초과로 중앙값을 쓴 배경 천체 수

    @property
    def background_bodies(self) -> Tuple[AsteroidBody, ...]:
        return tuple(body for body in self.bodies if not body.is_major)

    @property
    def major_bodies(self) -> Tuple[AsteroidBody, ...]:
        return tuple(body for body in self.bodies if body.is_major)

    def positions(self) -> np.ndarray:
        """(N, 3) 위치 배열"""
        if not self.bodies:
            return np.zeros((0, 3))
        return np.array([body.position for body in self.bodies], dtype=np.float64)

    def find(self, body_id: str) -> Optional[AsteroidBody]:
        """id로 주요 천체 검색"""
        for body in self.bodies:
            if body.is_major and body.body_id == body_id:
                return body
        return None

    def __len__(self) -> int:
        return len(self.bodies)


def sample_power_law(u: float, exponent: float, lo: float, hi: float) -> float:
    """
    [lo, hi] 구간 멱법칙 p(r) ∝ r^-exponent 의 역 CDF 샘플링

    exponent ≈ 1 이면 로그 균등 분포.
    """
    if abs(exponent - 1.0) < POWER_LAW_UNITY_TOLERANCE:
        return float(lo * (hi / lo) ** u)
    p = 1.0 - exponent
    lo_p, hi_p = lo**p, hi**p
    return float((lo_p + u * (hi_p - lo_p)) ** (1.0 / p))


def radial_density(t: float, concentration: float) -> float:
    """정규화된 소행성대 위치 t ∈ (0, 1)에서의 모양 함수 t^k (1-t)^k"""
    return (t * (1.0 - t)) ** concentration


def _peak_normalized_density(t: float, concentration: float) -> float:
    """radial_density(t, k) / radial_density(0.5, k), 최댓값 1"""
    return (4.0 * t * (1.0 - t)) ** concentration


class AsteroidBeltGenerator:
    """소행성대 생성기"""

    def __init__(self, config: Optional[AsteroidBeltConfig] = None):
        self.config = config or AsteroidBeltConfig()

    def generate(self, spec: AsteroidBeltSpec, stream: RandomStream) -> AsteroidBeltResult:
        """
        소행성대 생성

        배경 천체를 모두 뽑은 뒤 주요 천체를 추가한다.
        주요 천체는 난수를 소비하지 않는다.

        Args:
            spec: 소행성대 명세
            stream: 이 소행성대 전용 난수 스트림. 결과의 seed는 스트림의 초기 시드이므로
                새 스트림을 넘겨야 재현할 수 있다.

        Returns:
            생성 결과
        """
        bodies = []
        fallbacks = 0
        for _ in range(spec.asteroid_count):
            body, fell_back = self._sample_background_body(spec, stream)
            bodies.append(body)
            fallbacks += fell_back
        bodies.extend(self._place_major_body(major) for major in spec.major_bodies)

        if fallbacks:
            logger.warning(
                "%d of %d belt bodies exhausted rejection sampling and were placed at the belt midpoint",
                fallbacks, spec.asteroid_count,
            )
        logger.info(
            "Generated belt with %d background and %d major bodies (seed=%d)",
            spec.asteroid_count, len(spec.major_bodies), stream.seed,
        )
        return AsteroidBeltResult(
            bodies=tuple(bodies),
            seed=stream.seed,
            spec=spec,
            fallback_count=fallbacks,
        )

    def _sample_background_body(
        self, spec: AsteroidBeltSpec, stream: RandomStream
    ) -> Tuple[AsteroidBody, bool]:
        a, fell_back = self._sample_semi_major_axis(spec, stream)
        e = spec.max_eccentricity * stream.uniform_float() ** 2
        i = spec.max_inclination_deg * DEG_TO_RAD * stream.uniform_float() ** 2

        longitude = self._sample_longitude(spec, stream)
        raan = stream.uniform_angle()
        arg_periapsis = stream.uniform_angle()
        # ν = L − ω 가 아니라 Ω까지 빼서 실제 위치의 경도가 longitude가 되게 한다
        true_anomaly = normalize_angle(longitude - raan - arg_periapsis)

        radius = sample_power_law(
            stream.uniform_float(), spec.size_power_law_exponent,
            spec.min_body_radius, spec.max_body_radius,
        )

        elements = OrbitalElements(a, e, i, raan, arg_periapsis, true_anomaly)
        position = elements_to_position(a, e, i, raan, arg_periapsis, true_anomaly)
        body = AsteroidBody(position=tuple(float(x) for x in position), elements=elements, radius=radius)
        return body, fell_back

    def _sample_semi_major_axis(self, spec: AsteroidBeltSpec, stream: RandomStream) -> Tuple[float, bool]:
        """
        모양 함수 t^k (1-t)^k 에 대한 기각 샘플링 + 간극 회피

        모양 함수를 최댓값(t=0.5)으로 나눈 (4t(1-t))^k 와 비교해 수락 확률을
        유지한다. k가 커도 최댓값이 0으로 언더플로하지 않는다.
        시도 한도를 넘기면 소행성대 중앙값을 반환하며, 이 값은
        간극 검사를 다시 하지 않는다.
        """
        k = max(spec.radial_concentration, 0.0)
        width = spec.outer_radius - spec.inner_radius

        for _ in range(self.config.max_sampling_attempts):
            t = stream.uniform_float()
            threshold = stream.uniform_float()
            if threshold >= _peak_normalized_density(t, k):
                continue
            a = spec.inner_radius + t * width
            if not spec.in_gap(a):
                return a, False

        logger.debug("Rejection sampling exhausted, using belt midpoint %.4f AU", spec.midpoint)
        return spec.midpoint, True

    def _sample_longitude(self, spec: AsteroidBeltSpec, stream: RandomStream) -> float:
        """
        실제 위치 경도 샘플링

        cluster_fraction 확률로 임의의 군집 경도 주변의 래핑된 정규 분포
        (폰 미제스 근사, 표준편차 1/√κ), 나머지는 전 방위 균등.
        """
        if spec.has_clusters and stream.uniform_float() < spec.cluster_fraction:
            index = stream.uniform_int_range(0, len(spec.cluster_longitudes_deg) - 1)
            center = spec.cluster_longitudes_deg[index] * DEG_TO_RAD
            kappa = spec.cluster_concentrations[index]
            if kappa <= 0:
                return stream.uniform_angle()
            return normalize_angle(stream.normal(center, 1.0 / np.sqrt(kappa)))
        return stream.uniform_angle()

    def _place_major_body(self, major: MajorBodyInput) -> AsteroidBody:
        elements = major.to_elements()
        position = elements.position()
        return AsteroidBody(
            position=tuple(float(x) for x in position),
            elements=elements,
            radius=major.radius_km,
            is_major=True,
            body_id=major.body_id,
            body_type=major.body_type,
        )
