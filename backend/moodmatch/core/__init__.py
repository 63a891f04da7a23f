"""
Core - Motor de clasificación de moods y recomendación.

Este paquete contiene todos los componentes fundamentales del sistema:
- emotion: Normalización del vector emocional y simulador local
- mood: Catálogo de perfiles, scorer de compatibilidad y clasificador
- recommendation: Mapeo de moods a parámetros de recomendación
- utils: Utilidades matemáticas comunes
"""

from . import emotion
from . import mood
from . import recommendation
from . import utils

# Exponer componentes principales para facilitar imports
from .emotion import EmotionVector, normalize_emotions, simulate_emotions
from .mood import CatalogProvider, ClassifiedMood, MoodClassifier, MoodProfile
from .recommendation import RecommendationMapper, RecommendationParameters, TasteSignal

__all__ = [
    'emotion',
    'mood',
    'recommendation',
    'utils',
    'EmotionVector',
    'normalize_emotions',
    'simulate_emotions',
    'CatalogProvider',
    'ClassifiedMood',
    'MoodClassifier',
    'MoodProfile',
    'RecommendationMapper',
    'RecommendationParameters',
    'TasteSignal',
]
