# orbital_mechanics/__init__.py
"""
궤도 역학 모듈
"""

from .orbit import (
    OrbitalElements,
    solve_kepler,
    kepler_residual,
    eccentric_to_true,
    mean_to_true,
    true_to_eccentric,
    true_to_mean
)
from .coordinate_transforms import (
    perifocal_position,
    compute_rotation_matrix,
    elements_to_position,
    vertical_component,
    horizontal_distance,
    ecliptic_longitude
)
from .physics import (
    ParentContext,
    hill_sphere_radius,
    roche_limit,
    equilibrium_temperature,
    orbital_period,
    body_density
)

__all__ = [
    'OrbitalElements',
    'solve_kepler',
    'kepler_residual',
    'eccentric_to_true',
    'mean_to_true',
    'true_to_eccentric',
    'true_to_mean',
    'perifocal_position',
    'compute_rotation_matrix',
    'elements_to_position',
    'vertical_component',
    'horizontal_distance',
    'ecliptic_longitude',
    'ParentContext',
    'hill_sphere_radius',
    'roche_limit',
    'equilibrium_temperature',
    'orbital_period',
    'body_density'
]
