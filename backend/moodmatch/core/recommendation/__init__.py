"""
Módulo de recomendación.

Componentes:
    - tables: Categorías de mood y tablas estáticas (audio features,
      géneros, afinidad con eventos, razonamientos)
    - taste: Señal de gusto del usuario
    - events: Score de relevancia de eventos
    - mapper: Mood clasificado -> parámetros de recomendación
"""

from .tables import (
    MoodCategory,
    RecommendationStrategy,
    FeatureRange,
    AUDIO_FEATURES,
    AUDIO_FEATURE_TABLE,
    CATEGORY_GENRES,
    EVENT_AFFINITY,
    resolve_category,
)
from .taste import TasteSignal
from .events import (
    EventCandidate,
    EventWeights,
    ScoredEvent,
    DEFAULT_EVENT_WEIGHTS,
    proximity_score,
    temporal_score,
    score_events,
)
from .mapper import (
    RecommendationMapper,
    RecommendationParameters,
    select_genre_seeds,
    blend_ranges,
    mood_genre_pool,
    MAX_GENRE_SEEDS,
)

__all__ = [
    'MoodCategory',
    'RecommendationStrategy',
    'FeatureRange',
    'AUDIO_FEATURES',
    'AUDIO_FEATURE_TABLE',
    'CATEGORY_GENRES',
    'EVENT_AFFINITY',
    'resolve_category',
    'TasteSignal',
    'EventCandidate',
    'EventWeights',
    'ScoredEvent',
    'DEFAULT_EVENT_WEIGHTS',
    'proximity_score',
    'temporal_score',
    'score_events',
    'RecommendationMapper',
    'RecommendationParameters',
    'select_genre_seeds',
    'blend_ranges',
    'mood_genre_pool',
    'MAX_GENRE_SEEDS',
]
