"""
Puntuación de relevancia de eventos.

Cada evento candidato recibe un score compuesto a partir de cinco señales
en [0, 1]:

    score = affinity   * 0.40   afinidad mood -> categoría del evento
          + preference * 0.25   coincidencia con los gustos del usuario
          + proximity  * 0.15   cercanía (decrece con la distancia)
          + temporal   * 0.10   encaje temporal (días hasta el evento)
          + history    * 0.10   interacciones previas con la categoría

Los candidatos por debajo de min_score (0.3) se descartan y el resto se
ordena de mayor a menor score; los empates conservan el orden de entrada.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..utils import clamp, is_number, lerp, inverse_lerp
from .taste import TasteSignal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventWeights:
    """
    Pesos y umbrales del score de eventos.

    Attributes:
        affinity (float): Peso de la afinidad mood -> categoría
        preference (float): Peso de la coincidencia con el usuario
        proximity (float): Peso de la cercanía
        temporal (float): Peso del encaje temporal
        history (float): Peso del historial de interacciones
        min_score (float): Score compuesto mínimo para conservar un evento
        near_distance (float): Distancia con proximidad completa
        far_distance (float): Distancia a partir de la cual la proximidad
                              es residual
        far_proximity (float): Proximidad en far_distance
        unknown_proximity (float): Proximidad cuando no hay distancia
        full_days (Tuple[int, int]): Ventana de días con encaje completo
        partial_days (Tuple[int, int]): Ventana de días con encaje parcial
        partial_temporal (float): Encaje temporal en la ventana parcial
    """

    affinity: float = 0.40
    preference: float = 0.25
    proximity: float = 0.15
    temporal: float = 0.10
    history: float = 0.10
    min_score: float = 0.3
    near_distance: float = 5.0
    far_distance: float = 50.0
    far_proximity: float = 0.1
    unknown_proximity: float = 0.5
    full_days: Tuple[int, int] = (1, 14)
    partial_days: Tuple[int, int] = (15, 30)
    partial_temporal: float = 0.5


DEFAULT_EVENT_WEIGHTS = EventWeights()


@dataclass(frozen=True)
class EventCandidate:
    """
    Evento candidato a recomendar.

    Attributes:
        id (str): Identificador del evento
        name (str): Nombre visible
        category (str): Categoría (concert, festival, club, ...)
        distance (Optional[float]): Distancia al usuario (km); None si se
                                    desconoce
        days_until (Optional[float]): Días hasta el evento; None si se
                                      desconoce
        genres (Tuple[str, ...]): Géneros musicales del evento
    """

    id: str
    name: str = ""
    category: str = ""
    distance: Optional[float] = None
    days_until: Optional[float] = None
    genres: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'category', self.category.strip().lower())
        object.__setattr__(self, 'genres', tuple(g.strip().lower() for g in self.genres if g.strip()))

    @classmethod
    def from_dict(cls, data: Mapping) -> "EventCandidate":
        """
        Construye un candidato desde JSON (acepta daysUntil / days_until).

        Raises:
            ValueError: Si falta el id o algún campo tiene un tipo inválido
        """
        if not isinstance(data, Mapping):
            raise ValueError("Cada evento debe ser un objeto")

        event_id = data.get('id')
        if event_id is None or str(event_id).strip() == "":
            raise ValueError("Cada evento necesita un 'id'")

        category = data.get('category') or ""
        if not isinstance(category, str):
            raise ValueError(f"Evento '{event_id}': 'category' debe ser un string")

        distance = data.get('distance')
        days_until = data.get('days_until', data.get('daysUntil'))
        for key, value in (('distance', distance), ('days_until', days_until)):
            if value is not None and not is_number(value):
                raise ValueError(f"Evento '{event_id}': '{key}' debe ser numérico")

        genres = data.get('genres') or ()
        if isinstance(genres, str):
            genres = [genres]
        if not isinstance(genres, (list, tuple)) or not all(isinstance(g, str) for g in genres):
            raise ValueError(f"Evento '{event_id}': 'genres' debe ser una lista de strings")

        return cls(
            id=str(event_id),
            name=str(data.get('name') or ""),
            category=category,
            distance=None if distance is None else float(distance),
            days_until=None if days_until is None else float(days_until),
            genres=tuple(genres),
        )

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'distance': self.distance,
            'days_until': self.days_until,
            'genres': list(self.genres),
        }


@dataclass(frozen=True)
class ScoredEvent:
    """Evento con su score compuesto y el desglose por señal."""

    event: EventCandidate
    score: float
    components: Mapping[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return {
            'event': self.event.to_dict(),
            'score': self.score,
            'components': dict(self.components),
        }


def proximity_score(distance: Optional[float], weights: EventWeights = DEFAULT_EVENT_WEIGHTS) -> float:
    """
    Cercanía en [0, 1], monótona decreciente con la distancia.

    - distance <= near_distance          -> 1.0
    - near_distance < d <= far_distance  -> de 1.0 a far_proximity (lineal)
    - d > far_distance                   -> far_proximity * far_distance / d,
                                            tiende a 0
    - distancia desconocida              -> unknown_proximity

    Examples:
        >>> proximity_score(3)
        1.0
        >>> round(proximity_score(27.5), 3)
        0.55
        >>> proximity_score(100)
        0.05
    """
    if distance is None:
        return weights.unknown_proximity

    distance = max(0.0, float(distance))
    if distance <= weights.near_distance:
        return 1.0
    if distance <= weights.far_distance:
        t = inverse_lerp(weights.near_distance, weights.far_distance, distance)
        return lerp(1.0, weights.far_proximity, t)
    return weights.far_proximity * weights.far_distance / distance


def temporal_score(days_until: Optional[float], weights: EventWeights = DEFAULT_EVENT_WEIGHTS) -> float:
    """
    Encaje temporal: 1.0 para eventos a 1-14 días, 0.5 a 15-30, 0 en otro
    caso (incluidos eventos de hoy, pasados o sin fecha).
    """
    if days_until is None:
        return 0.0

    full_lo, full_hi = weights.full_days
    _, partial_hi = weights.partial_days
    if full_lo <= days_until <= full_hi:
        return 1.0
    if full_hi < days_until <= partial_hi:
        return weights.partial_temporal
    return 0.0


def preference_score(event: EventCandidate, taste: Optional[TasteSignal]) -> float:
    """
    Coincidencia con el usuario: 1.0 si la categoría es una de sus
    favoritas; si no, fracción de géneros del evento que el usuario prefiere.
    """
    if taste is None:
        return 0.0
    if event.category and event.category in taste.preferred_event_categories:
        return 1.0
    if not event.genres or not taste.preferred_genres:
        return 0.0

    preferred = {g.strip().lower() for g in taste.preferred_genres}
    matches = sum(1 for genre in event.genres if genre in preferred)
    return matches / len(event.genres)


def history_score(event: EventCandidate, taste: Optional[TasteSignal]) -> float:
    """Interacciones con la categoría del evento relativas a la categoría más usada."""
    if taste is None or not taste.event_interactions:
        return 0.0

    top = max(taste.event_interactions.values())
    if top <= 0:
        return 0.0
    return clamp(taste.event_interactions.get(event.category, 0.0) / top, 0.0, 1.0)


def score_event(
    event: EventCandidate,
    affinity_table: Mapping[str, float],
    taste: Optional[TasteSignal] = None,
    weights: EventWeights = DEFAULT_EVENT_WEIGHTS
) -> ScoredEvent:
    """
    Calcula el score compuesto de un evento.

    Args:
        event (EventCandidate): Evento candidato
        affinity_table (Mapping[str, float]): Categoría de evento -> afinidad
                                              con el mood actual
        taste (TasteSignal | None): Gustos del usuario
        weights (EventWeights): Pesos y umbrales

    Returns:
        ScoredEvent: Evento, score y desglose por señal
    """
    components = {
        'affinity': clamp(affinity_table.get(event.category, 0.0), 0.0, 1.0),
        'preference': preference_score(event, taste),
        'proximity': proximity_score(event.distance, weights),
        'temporal': temporal_score(event.days_until, weights),
        'history': history_score(event, taste),
    }

    score = (
        components['affinity'] * weights.affinity
        + components['preference'] * weights.preference
        + components['proximity'] * weights.proximity
        + components['temporal'] * weights.temporal
        + components['history'] * weights.history
    )
    return ScoredEvent(event=event, score=round(score, 6), components=components)


def score_events(
    events: Iterable[EventCandidate],
    affinity_table: Mapping[str, float],
    taste: Optional[TasteSignal] = None,
    weights: EventWeights = DEFAULT_EVENT_WEIGHTS
) -> List[ScoredEvent]:
    """
    Puntúa, filtra y ordena eventos candidatos.

    Returns:
        List[ScoredEvent]: Eventos con score >= min_score, de mayor a menor;
                           los empates conservan el orden de entrada
    """
    scored = [score_event(event, affinity_table, taste, weights) for event in events]
    kept = [s for s in scored if s.score >= weights.min_score]

    discarded = len(scored) - len(kept)
    if discarded:
        logger.debug(f"{discarded} evento(s) descartados por score < {weights.min_score}")

    return sorted(kept, key=lambda s: s.score, reverse=True)
