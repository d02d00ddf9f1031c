"""
모체 천체 정보 및 파생 물리량 (힐 구, 로슈 한계, 평형 온도)

모든 함수는 물리적으로 양수여야 하는 입력이 0 이하이면 예외 대신 0을 반환한다.
"""

import numpy as np
from dataclasses import dataclass, replace
from typing import Optional

from utils.constants import G, AU, M_SUN, L_SUN, T_SUN, STEFAN_BOLTZMANN


def hill_sphere_radius(body_mass: float, primary_mass: float, orbital_distance: float) -> float:
    """
    힐 구 반지름 계산

    Args:
        body_mass: 천체 질량 [kg]
        primary_mass: 주천체 질량 [kg]
        orbital_distance: 주천체로부터의 궤도 거리

    Returns:
        힐 반지름 (orbital_distance와 같은 단위), 입력이 유효하지 않으면 0
    """
    if body_mass <= 0 or primary_mass <= 0 or orbital_distance <= 0:
        return 0.0
    return float(orbital_distance * (body_mass / (3.0 * primary_mass)) ** (1.0 / 3.0))


def body_density(mass: float, radius: float) -> float:
    """구형 천체의 평균 밀도 [kg/m^3]"""
    if mass <= 0 or radius <= 0:
        return 0.0
    return float(mass / (4.0 / 3.0 * np.pi * radius**3))


def roche_limit(primary_radius: float, primary_mass: float, satellite_density: float) -> float:
    """
    강체 로슈 한계 계산

    Args:
        primary_radius: 주천체 반지름 [m]
        primary_mass: 주천체 질량 [kg]
        satellite_density: 위성 밀도 [kg/m^3]

    Returns:
        로슈 한계 [m], 입력이 유효하지 않으면 0
    """
    if primary_radius <= 0 or primary_mass <= 0 or satellite_density <= 0:
        return 0.0
    primary_density = body_density(primary_mass, primary_radius)
    return float(2.44 * primary_radius * (primary_density / satellite_density) ** (1.0 / 3.0))


def equilibrium_temperature(luminosity: float, distance: float, albedo: float = 0.3) -> float:
    """
    복사 평형 온도 (빠르게 자전하는 흑체)

    T = (L (1 - A) / (16 π σ d^2))^(1/4)

    Args:
        luminosity: 항성 광도 [W]
        distance: 항성으로부터의 거리 [m]
        albedo: 본드 알베도

    Returns:
        평형 온도 [K], 입력이 유효하지 않으면 0
    """
    if luminosity <= 0 or distance <= 0:
        return 0.0
    absorbed = luminosity * (1.0 - albedo) / (16.0 * np.pi * STEFAN_BOLTZMANN * distance**2)
    return float(max(absorbed, 0.0) ** 0.25)


def orbital_period(a: float, primary_mass: float, secondary_mass: float = 0.0) -> float:
    """
    케플러 제3법칙에 의한 공전 주기

    Args:
        a: 반장축 [m]
        primary_mass: 주천체 질량 [kg]
        secondary_mass: 공전 천체 질량 [kg]

    Returns:
        주기 [s], 입력이 유효하지 않으면 0
    """
    mu = G * (primary_mass + max(secondary_mass, 0.0))
    if a <= 0 or mu <= 0:
        return 0.0
    return float(2 * np.pi * np.sqrt(a**3 / mu))


@dataclass(frozen=True)
class ParentContext:
    """
    생성 대상 천체의 모체 정보

    항성 정보는 항상 존재하고, 위성의 위성을 배치할 때만
    모체 천체(parent_body_*) 정보가 채워진다.
    """

    star_mass: float  # [kg]
    star_luminosity: float  # [W]
    star_temperature: float  # [K]
    star_age: float  # [Gyr]
    orbital_distance: float  # 항성으로부터의 거리 [m]
    parent_body_mass: float = 0.0  # [kg]
    parent_body_radius: float = 0.0  # [m]
    parent_body_distance: float = 0.0  # 모체 천체로부터의 거리 [m]

    @classmethod
    def from_solar_units(
        cls,
        star_mass_solar: float = 1.0,
        luminosity_solar: float = 1.0,
        temperature: float = T_SUN,
        age_gyr: float = 4.6,
        distance_au: float = 1.0,
    ) -> "ParentContext":
        """태양 단위 / AU 단위 입력으로 생성"""
        return cls(
            star_mass=star_mass_solar * M_SUN,
            star_luminosity=luminosity_solar * L_SUN,
            star_temperature=temperature,
            star_age=age_gyr,
            orbital_distance=distance_au * AU,
        )

    def has_parent_body(self) -> bool:
        return self.parent_body_mass > 0

    def for_satellite_of(
        self,
        mass: float,
        radius: float,
        distance: float,
        orbital_distance: Optional[float] = None,
    ) -> "ParentContext":
        """
        항성 정보는 유지하고 모체 천체 정보만 교체한 컨텍스트

        Args:
            mass: 모체 천체 질량 [kg]
            radius: 모체 천체 반지름 [m]
            distance: 모체 천체로부터의 거리 [m]
            orbital_distance: 모체 천체의 항성 거리 [m] (None이면 유지)
        """
        return replace(
            self,
            orbital_distance=self.orbital_distance if orbital_distance is None else orbital_distance,
            parent_body_mass=mass,
            parent_body_radius=radius,
            parent_body_distance=distance,
        )

    def equilibrium_temperature(self, albedo: float = 0.3) -> float:
        return equilibrium_temperature(self.star_luminosity, self.orbital_distance, albedo)

    def parent_hill_radius(self) -> float:
        """모체 천체의 항성 기준 힐 반지름 (모체가 없으면 0)"""
        if not self.has_parent_body():
            return 0.0
        return hill_sphere_radius(self.parent_body_mass, self.star_mass, self.orbital_distance)

    def parent_roche_limit(self, satellite_density: float) -> float:
        """모체 천체 주위의 로슈 한계 (모체가 없으면 0)"""
        if not self.has_parent_body():
            return 0.0
        return roche_limit(self.parent_body_radius, self.parent_body_mass, satellite_density)
