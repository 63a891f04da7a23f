"""
Mapper de mood clasificado a parámetros de recomendación.

Convierte un ClassifiedMood (y, opcionalmente, los gustos del usuario y
una lista de eventos candidatos) en los parámetros que consume un cliente
externo de música/eventos:

    - category: MoodCategory resuelta a partir del perfil ganador
    - audio_features: rangos objetivo por feature; en moods complejos se
      mezclan principal y secundario 70/30
    - genre_seeds: hasta 5 géneros, primero los del usuario que encajan con
      el mood y después los del mood
    - event_weights: afinidad del mood con cada categoría de evento
    - ranked_events: eventos candidatos puntuados y filtrados
    - reasoning: texto explicativo
    - strategy: estrategia de recomendación

El mapper es puro: mismas entradas producen exactamente la misma salida.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from ..mood.classifier import ClassifiedMood
from ..mood.profile import MoodProfile
from .events import DEFAULT_EVENT_WEIGHTS, EventCandidate, EventWeights, ScoredEvent, score_events
from .tables import (
    ARTIST_CLAUSE,
    AUDIO_FEATURES,
    AUDIO_FEATURE_TABLE,
    CATEGORY_GENRES,
    DEFAULT_REASONING,
    EVENT_AFFINITY,
    GENRE_CLAUSE,
    PLACEHOLDER_ARTIST,
    REASONING_TEMPLATES,
    STRATEGY_RULES,
    FeatureRange,
    MoodCategory,
    RecommendationStrategy,
    resolve_category,
)
from .taste import TasteSignal

logger = logging.getLogger(__name__)

MAX_GENRE_SEEDS = 5

# Peso del mood principal al mezclar con el secundario
PRIMARY_BLEND_WEIGHT = 0.7

# Decimales de los valores mezclados
_PRECISION = 4


@dataclass(frozen=True)
class RecommendationParameters:
    """
    Parámetros de recomendación derivados de un mood.

    Attributes:
        category (MoodCategory): Categoría del mood principal
        genre_seeds (Tuple[str, ...]): Hasta 5 géneros semilla
        audio_features (Mapping[str, FeatureRange]): Rangos objetivo (solo lectura)
        event_weights (Mapping[str, float]): Afinidad por categoría de evento
                                         (solo lectura)
        ranked_events (Tuple[ScoredEvent, ...]): Eventos relevantes ordenados
        reasoning (str): Texto explicativo
        strategy (RecommendationStrategy): Estrategia aplicada
        secondary_category (Optional[MoodCategory]): Categoría del mood
                                                     secundario (moods complejos)
    """

    category: MoodCategory
    genre_seeds: Tuple[str, ...]
    audio_features: Mapping[str, FeatureRange]
    event_weights: Mapping[str, float]
    ranked_events: Tuple[ScoredEvent, ...]
    reasoning: str
    strategy: RecommendationStrategy
    secondary_category: Optional[MoodCategory] = None

    def __post_init__(self):
        object.__setattr__(self, 'audio_features', MappingProxyType(dict(self.audio_features)))
        object.__setattr__(self, 'event_weights', MappingProxyType(dict(self.event_weights)))

    def to_dict(self) -> Dict:
        return {
            'category': self.category.value,
            'secondary_category': self.secondary_category.value if self.secondary_category else None,
            'genre_seeds': list(self.genre_seeds),
            'audio_features': {name: r.to_dict() for name, r in self.audio_features.items()},
            'event_weights': dict(self.event_weights),
            'ranked_events': [e.to_dict() for e in self.ranked_events],
            'reasoning': self.reasoning,
            'strategy': self.strategy.value,
        }


def _genre_key(genre: str) -> str:
    return genre.strip().lower()


def mood_genre_pool(category: MoodCategory, profile: Optional[MoodProfile] = None) -> List[str]:
    """
    Géneros apropiados para el mood, en orden: primero los de la categoría
    y después los music_tags del perfil, sin duplicados.
    """
    pool: List[str] = []
    seen = set()
    tags = list(CATEGORY_GENRES[category]) + (list(profile.music_tags) if profile else [])
    for tag in tags:
        key = _genre_key(tag)
        if key and key not in seen:
            seen.add(key)
            pool.append(key)
    return pool


def select_genre_seeds(
    user_genres: Optional[Sequence[str]],
    mood_genres: Sequence[str],
    limit: int = MAX_GENRE_SEEDS
) -> List[str]:
    """
    Selecciona los géneros semilla.

    Primero la intersección usuario ∩ mood en el orden del usuario, después
    el resto de géneros del mood en su orden, sin duplicados
    (sin distinguir mayúsculas) y hasta `limit` elementos.

    Args:
        user_genres (Sequence[str] | None): Géneros preferidos del usuario
        mood_genres (Sequence[str]): Géneros apropiados para el mood
        limit (int): Número máximo de semillas

    Returns:
        List[str]: Géneros en minúsculas

    Example:
        >>> select_genre_seeds(["Rock", "pop", "jazz"], ["pop", "dance", "disco", "rock"])
        ['rock', 'pop', 'dance', 'disco']
    """
    mood_keys = [_genre_key(g) for g in mood_genres if _genre_key(g)]
    mood_set = set(mood_keys)

    seeds: List[str] = []
    seen = set()

    for genre in user_genres or ():
        key = _genre_key(genre)
        if key in mood_set and key not in seen:
            seeds.append(key)
            seen.add(key)

    for key in mood_keys:
        if key not in seen:
            seeds.append(key)
            seen.add(key)

    return seeds[:limit]


def blend_ranges(primary: FeatureRange, secondary: FeatureRange, weight: float = PRIMARY_BLEND_WEIGHT) -> FeatureRange:
    """
    Mezcla dos rangos de una feature.

    El objetivo es la media ponderada de los puntos medios (principal con
    `weight`, secundario con 1 - weight) y el rango se ensancha hasta cubrir
    ambos.

    Example:
        >>> blend_ranges(FeatureRange(0.6, 1.0, 0.8), FeatureRange(0.0, 0.4, 0.2))
        FeatureRange(min=0.0, max=1.0, target=0.62)
    """
    midpoints = np.array([primary.midpoint, secondary.midpoint])
    target = np.average(midpoints, weights=[weight, 1.0 - weight])
    return FeatureRange(
        min=float(min(primary.min, secondary.min)),
        max=float(max(primary.max, secondary.max)),
        target=round(float(target), _PRECISION),
    )


def audio_feature_targets(
    category: MoodCategory,
    secondary: Optional[MoodCategory] = None,
    weight: float = PRIMARY_BLEND_WEIGHT
) -> Dict[str, FeatureRange]:
    """Rangos objetivo del mood, mezclados con el secundario si existe."""
    primary_table = AUDIO_FEATURE_TABLE[category]
    if secondary is None:
        return {name: primary_table[name] for name in AUDIO_FEATURES}

    secondary_table = AUDIO_FEATURE_TABLE[secondary]
    return {
        name: blend_ranges(primary_table[name], secondary_table[name], weight)
        for name in AUDIO_FEATURES
    }


def event_category_weights(
    category: MoodCategory,
    secondary: Optional[MoodCategory] = None,
    weight: float = PRIMARY_BLEND_WEIGHT
) -> Dict[str, float]:
    """Afinidad por categoría de evento, mezclada 70/30 en moods complejos."""
    primary_table = EVENT_AFFINITY[category]
    if secondary is None:
        return dict(primary_table)

    secondary_table = EVENT_AFFINITY[secondary]
    names = list(primary_table) + [n for n in secondary_table if n not in primary_table]
    values = np.array([
        [primary_table.get(n, 0.0) for n in names],
        [secondary_table.get(n, 0.0) for n in names],
    ])
    blended = np.average(values, axis=0, weights=[weight, 1.0 - weight])
    return {name: round(float(value), _PRECISION) for name, value in zip(names, blended)}


def build_reasoning(category: MoodCategory, taste: Optional[TasteSignal] = None) -> str:
    """
    Texto explicativo: frase base por categoría, más una cláusula sobre el
    género favorito y otra sobre el artista favorito si se conocen.
    """
    reasoning = REASONING_TEMPLATES.get(category, DEFAULT_REASONING)
    if taste is None:
        return reasoning

    if taste.preferred_genres:
        reasoning += GENRE_CLAUSE.format(genre=taste.preferred_genres[0])

    if taste.preferred_artists and taste.preferred_artists[0].strip().lower() != PLACEHOLDER_ARTIST:
        reasoning += ARTIST_CLAUSE.format(artist=taste.preferred_artists[0])

    return reasoning


def recommendation_strategy(category: MoodCategory, taste: Optional[TasteSignal] = None) -> RecommendationStrategy:
    """
    Cruza el mood con los géneros del usuario:

        - sad + melancholy    -> CONTRAST_BOOST (música que contrarreste)
        - happy + pop         -> MOOD_REINFORCEMENT
        - angry + metal       -> PERSONAL_TASTE
        - calm + classical    -> PERFECT_MATCH
        - en otro caso        -> DISCOVERY
    """
    genres = {_genre_key(g) for g in taste.preferred_genres} if taste else set()
    for rule_category, genre, strategy in STRATEGY_RULES:
        if category == rule_category and genre in genres:
            return strategy
    return RecommendationStrategy.DISCOVERY


class RecommendationMapper:
    """
    Traduce moods clasificados a parámetros de recomendación.

    Attributes:
        blend_weight (float): Peso del mood principal en moods complejos
        event_weights (EventWeights): Pesos del score de eventos
        max_genre_seeds (int): Número máximo de géneros semilla

    Example:
        >>> mapper = RecommendationMapper()
        >>> params = mapper.map(mood, TasteSignal(preferred_genres=("pop",)))
        >>> params.genre_seeds[0]
        'pop'
    """

    def __init__(
        self,
        blend_weight: float = PRIMARY_BLEND_WEIGHT,
        event_weights: EventWeights = DEFAULT_EVENT_WEIGHTS,
        max_genre_seeds: int = MAX_GENRE_SEEDS
    ):
        if not 0.0 <= blend_weight <= 1.0:
            raise ValueError(f"blend_weight debe estar en [0, 1], recibido {blend_weight}")
        self.blend_weight = blend_weight
        self.event_weights = event_weights
        self.max_genre_seeds = max_genre_seeds

    def map(
        self,
        mood: ClassifiedMood,
        taste: Optional[TasteSignal] = None,
        events: Optional[Iterable[EventCandidate]] = None
    ) -> RecommendationParameters:
        """
        Calcula los parámetros de recomendación de un mood.

        Args:
            mood (ClassifiedMood): Resultado del clasificador
            taste (TasteSignal | None): Gustos del usuario; sin ellos se usan
                                        solo los valores del mood
            events (Iterable[EventCandidate] | None): Eventos candidatos

        Returns:
            RecommendationParameters: Parámetros inmutables
        """
        category = resolve_category(mood.profile)

        secondary = None
        if mood.is_complex and mood.secondary_profile is not None:
            secondary = resolve_category(mood.secondary_profile)

        audio_features = audio_feature_targets(category, secondary, self.blend_weight)
        event_weights = event_category_weights(category, secondary, self.blend_weight)

        pool = mood_genre_pool(category, mood.profile)
        genre_seeds = select_genre_seeds(
            taste.preferred_genres if taste else None,
            pool,
            self.max_genre_seeds
        )

        ranked: Tuple[ScoredEvent, ...] = ()
        if events:
            ranked = tuple(score_events(events, event_weights, taste, self.event_weights))

        params = RecommendationParameters(
            category=category,
            secondary_category=secondary,
            genre_seeds=tuple(genre_seeds),
            audio_features=audio_features,
            event_weights=event_weights,
            ranked_events=ranked,
            reasoning=build_reasoning(category, taste),
            strategy=recommendation_strategy(category, taste),
        )

        logger.info(
            f"Recomendación para '{mood.primary}': categoría={category.value}"
            f"{f'/{secondary.value}' if secondary else ''}, "
            f"géneros={list(genre_seeds)}, eventos={len(ranked)}"
        )
        return params
