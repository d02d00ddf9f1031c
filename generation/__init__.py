# generation/__init__.py
"""
절차적 천체 배치 생성 모듈
"""

from .seeds import hash_ints, derive, derive_indexed, derive_path
from .random_stream import RandomStream
from .moons import (
    SizeCategory,
    PlanetSummary,
    MoonRecord,
    MoonPlacementResult,
    MoonPlacementGenerator,
    classify_planet_mass,
    classify_capture,
    planet_tier
)
from .asteroid_belt import (
    MajorBodyInput,
    AsteroidBeltSpec,
    AsteroidBody,
    AsteroidBeltResult,
    AsteroidBeltGenerator,
    sample_power_law,
    radial_density
)

__all__ = [
    'hash_ints', 'derive', 'derive_indexed', 'derive_path',
    'RandomStream',
    'SizeCategory', 'PlanetSummary', 'MoonRecord', 'MoonPlacementResult',
    'MoonPlacementGenerator', 'classify_planet_mass', 'classify_capture', 'planet_tier',
    'MajorBodyInput', 'AsteroidBeltSpec', 'AsteroidBody', 'AsteroidBeltResult',
    'AsteroidBeltGenerator', 'sample_power_law', 'radial_density'
]
