"""
Módulo de clasificación de moods.

Componentes:
    - profile: Modelo MoodProfile y parseo de filas del catálogo
    - catalog: Carga perezosa y cacheada del catálogo de perfiles
    - scorer: Compatibilidad vector emocional <-> perfil
    - classifier: Selección de mood principal/secundario y fallbacks
"""

from .profile import MoodProfile, MalformedRowError, parse_profile_row, pick_quote
from .catalog import CatalogProvider, load_profiles_from_csv, DEFAULT_CATALOG_PATH
from .scorer import ScoringSettings, ScoredProfile, compatibility_score, score_catalog
from .classifier import (
    ClassifiedMood,
    Complexity,
    MoodClassifier,
    classify_emotions,
    EMOTION_DRIFT_LABEL,
    NEUTRAL_BALANCE_LABEL,
)

__all__ = [
    'MoodProfile',
    'MalformedRowError',
    'parse_profile_row',
    'pick_quote',
    'CatalogProvider',
    'load_profiles_from_csv',
    'DEFAULT_CATALOG_PATH',
    'ScoringSettings',
    'ScoredProfile',
    'compatibility_score',
    'score_catalog',
    'ClassifiedMood',
    'Complexity',
    'MoodClassifier',
    'classify_emotions',
    'EMOTION_DRIFT_LABEL',
    'NEUTRAL_BALANCE_LABEL',
]
