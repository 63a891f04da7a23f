"""
Módulo de utilidades comunes del sistema.

Funciones reutilizables por el clasificador de moods y el mapper de
recomendaciones.
"""

from .math import clamp, lerp, inverse_lerp, is_number

__all__ = ['clamp', 'lerp', 'inverse_lerp', 'is_number']
