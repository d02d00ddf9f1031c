# utils/__init__.py
"""
유틸리티 모듈
"""

from .constants import *
from .helpers import *

__all__ = [
    'G', 'AU', 'M_SUN', 'L_SUN', 'T_SUN', 'M_EARTH', 'R_EARTH',
    'STEFAN_BOLTZMANN', 'SEED_MASK', 'GENERATOR_VERSION',
    'MOON_PLACEMENT_PARAMS', 'ASTEROID_BELT_PARAMS', 'LOGGING_PARAMS',
    'DEG_TO_RAD', 'RAD_TO_DEG', 'TWO_PI',
    'setup_logging', 'get_logger', 'save_json', 'load_json',
    'normalize_angle', 'clamp',
    'format_distance',
]
