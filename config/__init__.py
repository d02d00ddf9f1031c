# config/__init__.py
"""
설정 관리 모듈
"""

from .settings import (
    ProjectConfig, MoonPlacementConfig, AsteroidBeltConfig,
    LoggingConfig, get_config
)

__all__ = [
    'ProjectConfig', 'MoonPlacementConfig', 'AsteroidBeltConfig',
    'LoggingConfig', 'get_config'
]
