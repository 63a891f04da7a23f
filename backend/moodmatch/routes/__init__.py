"""
Módulo de rutas de la API Flask.

Este paquete contiene los blueprints que definen los endpoints
de la API REST del motor de moods.
"""

from .health import health_bp
from .mood import mood_bp

__all__ = ['health_bp', 'mood_bp']
