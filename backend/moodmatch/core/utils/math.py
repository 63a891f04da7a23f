"""
Utilidades matemáticas comunes del sistema.

Funciones pequeñas reutilizadas por el scorer de perfiles, el mapper de
recomendaciones y el scoring de eventos.
"""

import math
import numbers
from typing import Any


def clamp(x: float, lo: float, hi: float) -> float:
    """
    Restringe un valor al rango [lo, hi].

    Examples:
        >>> clamp(1.4, 0.0, 1.0)
        1.0
        >>> clamp(-3.0, 0.0, 1.0)
        0.0
    """
    return max(lo, min(hi, x))


def lerp(lo: float, hi: float, t: float) -> float:
    """
    Interpolación lineal entre dos valores: lo + (hi - lo) * t.

    Examples:
        >>> lerp(60, 180, 0.5)
        120.0
    """
    return lo + (hi - lo) * t


def inverse_lerp(lo: float, hi: float, x: float) -> float:
    """
    Posición relativa de x entre lo y hi, restringida a [0, 1].

    Si lo == hi el rango es degenerado y se devuelve 0.0.

    Examples:
        >>> inverse_lerp(5, 50, 27.5)
        0.5
    """
    if hi == lo:
        return 0.0
    return clamp((x - lo) / (hi - lo), 0.0, 1.0)


def is_number(value: Any) -> bool:
    """
    Indica si un valor es un número real finito (no bool, no NaN).

    Los detectores externos a veces devuelven strings, None o NaN; todos
    ellos se consideran "no numéricos".
    """
    if isinstance(value, bool):
        return False
    if not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)
