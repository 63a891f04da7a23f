"""
Módulo de emociones faciales.

Normalización de los vectores que entrega un detector externo y un
simulador local para trabajar sin cámara.
"""

from .schema import (
    EmotionVector,
    normalize_emotions,
    clean_label,
    get_top_emotions,
    NOISE_THRESHOLD,
)
from .simulator import simulate_emotions, SIMULATED_EMOTIONS

__all__ = [
    'EmotionVector',
    'normalize_emotions',
    'clean_label',
    'get_top_emotions',
    'NOISE_THRESHOLD',
    'simulate_emotions',
    'SIMULATED_EMOTIONS',
]
