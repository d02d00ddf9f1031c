"""
프로젝트 설정 관리 모듈
"""

from dataclasses import dataclass, field, fields, asdict
from typing import Dict, Any, List, Optional
from utils.constants import (
    MOON_PLACEMENT_PARAMS,
    ASTEROID_BELT_PARAMS,
    LOGGING_PARAMS,
)
from utils.helpers import save_json, load_json


@dataclass
class MoonPlacementConfig:
    """위성 배치 설정"""

    inner_limit_radii: float = MOON_PLACEMENT_PARAMS["inner_limit_radii"]
    outer_hill_fraction: float = MOON_PLACEMENT_PARAMS["outer_hill_fraction"]
    capture_inner_fraction: float = MOON_PLACEMENT_PARAMS["capture_inner_fraction"]
    capture_outer_fraction: float = MOON_PLACEMENT_PARAMS["capture_outer_fraction"]
    capture_probability: float = MOON_PLACEMENT_PARAMS["capture_probability"]
    min_spacing_ratio: float = MOON_PLACEMENT_PARAMS["min_spacing_ratio"]
    jitter_fraction: float = MOON_PLACEMENT_PARAMS["jitter_fraction"]
    max_spacing_attempts: int = MOON_PLACEMENT_PARAMS["max_spacing_attempts"]
    count_bias_exponent: float = MOON_PLACEMENT_PARAMS["count_bias_exponent"]
    fraction_min: float = MOON_PLACEMENT_PARAMS["fraction_min"]
    fraction_max: float = MOON_PLACEMENT_PARAMS["fraction_max"]


@dataclass
class AsteroidBeltConfig:
    """소행성대 설정 (기본 소행성대 명세 + 샘플러 설정)"""

    inner_radius: float = ASTEROID_BELT_PARAMS["inner_radius"]
    outer_radius: float = ASTEROID_BELT_PARAMS["outer_radius"]
    asteroid_count: int = ASTEROID_BELT_PARAMS["asteroid_count"]
    max_inclination_deg: float = ASTEROID_BELT_PARAMS["max_inclination_deg"]
    max_eccentricity: float = ASTEROID_BELT_PARAMS["max_eccentricity"]
    min_body_radius: float = ASTEROID_BELT_PARAMS["min_body_radius"]
    max_body_radius: float = ASTEROID_BELT_PARAMS["max_body_radius"]
    size_power_law_exponent: float = ASTEROID_BELT_PARAMS["size_power_law_exponent"]
    radial_concentration: float = ASTEROID_BELT_PARAMS["radial_concentration"]
    gap_centers: List[float] = field(
        default_factory=lambda: list(ASTEROID_BELT_PARAMS["gap_centers"])
    )
    gap_half_widths: List[float] = field(
        default_factory=lambda: list(ASTEROID_BELT_PARAMS["gap_half_widths"])
    )
    cluster_longitudes_deg: List[float] = field(
        default_factory=lambda: list(ASTEROID_BELT_PARAMS["cluster_longitudes_deg"])
    )
    cluster_concentrations: List[float] = field(
        default_factory=lambda: list(ASTEROID_BELT_PARAMS["cluster_concentrations"])
    )
    cluster_fraction: float = ASTEROID_BELT_PARAMS["cluster_fraction"]

    # 기각 샘플링 최대 시도 횟수 (초과 시 소행성대 중앙값 사용)
    max_sampling_attempts: int = ASTEROID_BELT_PARAMS["max_sampling_attempts"]


@dataclass
class LoggingConfig:
    """로깅 설정"""

    level: str = LOGGING_PARAMS["level"]
    log_file: Optional[str] = LOGGING_PARAMS["log_file"]


@dataclass
class ProjectConfig:
    """프로젝트 전체 설정"""

    moons: MoonPlacementConfig = field(default_factory=MoonPlacementConfig)
    belt: AsteroidBeltConfig = field(default_factory=AsteroidBeltConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # 실험 설정
    experiment_name: str = "default_experiment"
    root_seed: int = 42
    debug_mode: bool = False

    def __post_init__(self):
        """초기화 후 처리"""
        # 딕셔너리로 주어진 하위 설정을 데이터클래스로 변환
        for name, sub_cls in _SECTIONS.items():
            value = getattr(self, name)
            if isinstance(value, dict):
                setattr(self, name, _build_section(sub_cls, value))

        # 디버그 모드에서는 로그 레벨을 DEBUG로
        if self.debug_mode:
            self.logging.level = "DEBUG"

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "ProjectConfig":
        """딕셔너리로부터 설정 생성"""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in config_dict.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환"""
        return asdict(self)

    def save_to_file(self, filepath: str):
        """설정을 파일로 저장"""
        save_json(self.to_dict(), filepath)

    @classmethod
    def load_from_file(cls, filepath: str) -> "ProjectConfig":
        """파일로부터 설정 로드"""
        return cls.from_dict(load_json(filepath))


_SECTIONS = {
    "moons": MoonPlacementConfig,
    "belt": AsteroidBeltConfig,
    "logging": LoggingConfig,
}


def _build_section(section_cls, values: Dict[str, Any]):
    """딕셔너리로부터 하위 설정 생성 (알 수 없는 키는 ValueError)"""
    known = {f.name for f in fields(section_cls)}
    unknown = set(values) - known
    if unknown:
        raise ValueError(f"Unknown {section_cls.__name__} keys: {sorted(unknown)}")
    return section_cls(**values)


def get_config(
    experiment_name: Optional[str] = None,
    debug_mode: bool = False,
    custom_config: Optional[Dict[str, Any]] = None,
) -> ProjectConfig:
    """설정 인스턴스 생성 및 반환"""

    config = ProjectConfig()

    if experiment_name:
        config.experiment_name = experiment_name

    if custom_config:
        for key, value in custom_config.items():
            if key in _SECTIONS and isinstance(value, dict):
                section = getattr(config, key)
                for sub_key, sub_value in value.items():
                    if not hasattr(section, sub_key):
                        raise ValueError(f"Unknown {key} setting: {sub_key}")
                    setattr(section, sub_key, sub_value)
            elif hasattr(config, key):
                setattr(config, key, value)

    if debug_mode:
        config.debug_mode = True
        config.logging.level = "DEBUG"

    return config
