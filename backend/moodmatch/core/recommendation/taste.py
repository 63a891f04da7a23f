"""
Señal de gusto del usuario.

La proporciona un servicio externo (historial de escucha, perfil de
usuario). Es opcional: sin ella la recomendación se basa solo en el mood.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from ..utils import is_number


def _as_str_tuple(value, key: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"'{key}' debe ser una lista de strings")

    items = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"'{key}' debe ser una lista de strings")
        item = item.strip()
        if item:
            items.append(item)
    return tuple(items)


def _as_counts(value, key: str) -> Dict[str, float]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"'{key}' debe ser un objeto categoría -> contador")

    counts = {}
    for category, count in value.items():
        if not is_number(count) or count < 0:
            raise ValueError(f"'{key}.{category}' debe ser un número >= 0")
        counts[str(category)] = float(count)
    return counts


@dataclass(frozen=True)
class TasteSignal:
    """
    Preferencias del usuario.

    Attributes:
        preferred_genres (Tuple[str, ...]): Géneros en orden de preferencia
        preferred_artists (Tuple[str, ...]): Artistas en orden de preferencia
        preferred_event_categories (Tuple[str, ...]): Categorías de evento
                                                      favoritas
        event_interactions (Mapping[str, float]): Categoría de evento ->
                                                  número de interacciones
    """

    preferred_genres: Tuple[str, ...] = ()
    preferred_artists: Tuple[str, ...] = ()
    preferred_event_categories: Tuple[str, ...] = ()
    event_interactions: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'preferred_genres', tuple(self.preferred_genres))
        object.__setattr__(self, 'preferred_artists', tuple(self.preferred_artists))
        object.__setattr__(
            self,
            'preferred_event_categories',
            tuple(c.strip().lower() for c in self.preferred_event_categories)
        )
        # Mismas claves que EventCandidate.category; las variantes de una
        # misma categoría suman sus interacciones
        interactions: Dict[str, float] = {}
        for category, count in self.event_interactions.items():
            name = str(category).strip().lower()
            interactions[name] = interactions.get(name, 0.0) + count
        object.__setattr__(self, 'event_interactions', MappingProxyType(interactions))

    def __hash__(self) -> int:
        return hash((
            self.preferred_genres,
            self.preferred_artists,
            self.preferred_event_categories,
            tuple(sorted(self.event_interactions.items())),
        ))

    @property
    def is_empty(self) -> bool:
        return not (
            self.preferred_genres
            or self.preferred_artists
            or self.preferred_event_categories
            or self.event_interactions
        )

    @classmethod
    def from_dict(cls, data: Optional[Mapping]) -> "TasteSignal":
        """
        Construye la señal desde JSON, aceptando claves camelCase
        (preferredGenres) o snake_case (preferred_genres).

        Raises:
            ValueError: Si algún campo no tiene la forma esperada
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValueError("La señal de gusto debe ser un objeto")

        def pick(snake: str, camel: str):
            return data.get(snake, data.get(camel))

        return cls(
            preferred_genres=_as_str_tuple(pick('preferred_genres', 'preferredGenres'), 'preferred_genres'),
            preferred_artists=_as_str_tuple(pick('preferred_artists', 'preferredArtists'), 'preferred_artists'),
            preferred_event_categories=_as_str_tuple(
                pick('preferred_event_categories', 'preferredEventCategories'),
                'preferred_event_categories'
            ),
            event_interactions=_as_counts(
                pick('event_interactions', 'eventInteractions'),
                'event_interactions'
            ),
        )

    def to_dict(self) -> Dict:
        return {
            'preferred_genres': list(self.preferred_genres),
            'preferred_artists': list(self.preferred_artists),
            'preferred_event_categories': list(self.preferred_event_categories),
            'event_interactions': dict(self.event_interactions),
        }
