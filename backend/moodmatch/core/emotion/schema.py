"""
Módulo de normalización de vectores emocionales.

Este módulo define el EmotionVector utilizado en todo el sistema y la
función que limpia el mapa crudo etiqueta -> confianza que entrega un
detector externo (API en la nube o simulador local).

La normalización se aplica siempre, sin importar el origen del vector:
    1. Las etiquetas se recortan y pasan a minúsculas
    2. Se descartan las confianzas por debajo del umbral de ruido (1.0)
    3. Las entradas restantes se ordenan por confianza descendente

Un vector vacío (o compuesto solo por ruido) NO es un error: es una señal
"neutral" válida que el clasificador resuelve con un perfil de fallback.
"""

import logging
from collections.abc import Mapping
from typing import Dict, Iterator, List, Optional, Tuple

from ..utils import is_number

logger = logging.getLogger(__name__)

# Confianzas estrictamente menores se consideran ruido del sensor/API
NOISE_THRESHOLD: float = 1.0

# Prefijo que añaden algunos detectores en la nube a sus etiquetas
# (p. ej. "EmotionName.HAPPY"); se compara ya en minúsculas
DETECTOR_LABEL_PREFIX: str = "emotionname."


class EmotionVector(Mapping):
    """
    Mapa inmutable etiqueta -> confianza en [0, 100].

    Las etiquetas son únicas y están en minúsculas. El orden de iteración
    es de mayor a menor confianza; solo se usa para que el scoring sea
    determinista, no para la corrección del resultado.

    Example:
        >>> vector = normalize_emotions({"Happy": 85, "sad": 0.4})
        >>> dict(vector)
        {'happy': 85.0}
        >>> vector.dominant()
        ('happy', 85.0)
    """

    __slots__ = ('_data',)

    def __init__(self, entries: Optional[Mapping] = None):
        data = dict(entries or {})
        ordered = sorted(data.items(), key=lambda item: item[1], reverse=True)
        self._data: Dict[str, float] = dict(ordered)

    def __getitem__(self, label: str) -> float:
        return self._data[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other) -> bool:
        if isinstance(other, EmotionVector):
            return list(self._data.items()) == list(other._data.items())
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._data.items()))

    def __repr__(self) -> str:
        return f"EmotionVector({self._data!r})"

    def dominant(self) -> Optional[Tuple[str, float]]:
        """Retorna (etiqueta, confianza) de la emoción dominante, o None."""
        for label, confidence in self._data.items():
            return (label, confidence)
        return None

    def to_dict(self) -> Dict[str, float]:
        """Copia mutable del vector, en orden de confianza descendente."""
        return dict(self._data)


def clean_label(label) -> str:
    """
    Normaliza una etiqueta de emoción: recorta, pasa a minúsculas y quita
    el prefijo de enum del detector si lo hubiera.

    Examples:
        >>> clean_label("  Happy ")
        'happy'
        >>> clean_label("EmotionName.SURPRISED")
        'surprised'
    """
    if label is None:
        return ""
    cleaned = str(label).strip().lower()
    if cleaned.startswith(DETECTOR_LABEL_PREFIX):
        cleaned = cleaned[len(DETECTOR_LABEL_PREFIX):].strip()
    return cleaned


def normalize_emotions(raw: Optional[Mapping]) -> EmotionVector:
    """
    Limpia y filtra un mapa crudo de emociones.

    Esta función es total: nunca lanza excepciones para entradas con forma
    de diccionario. Las entradas no numéricas (strings, None, NaN, bool) y
    las etiquetas vacías se descartan. Si dos etiquetas colisionan tras la
    normalización ("Happy" y "happy"), se conserva la confianza más alta.

    Args:
        raw (Mapping | None): Mapa etiqueta -> confianza (0-100) tal como lo
                              entrega el detector. Se aceptan valores
                              negativos o mayores que 100.

    Returns:
        EmotionVector: Vector normalizado, ordenado por confianza descendente.
                       Vacío si la entrada estaba vacía o era todo ruido.

    Examples:
        >>> dict(normalize_emotions({"happy": 0.5, "sad": 40}))
        {'sad': 40.0}

        >>> len(normalize_emotions({}))
        0
    """
    if not raw:
        return EmotionVector()

    cleaned: Dict[str, float] = {}
    for label, confidence in raw.items():
        name = clean_label(label)
        if not name:
            continue
        if not is_number(confidence):
            logger.debug(f"Descartando '{label}': confianza no numérica ({confidence!r})")
            continue
        value = float(confidence)
        if value < NOISE_THRESHOLD:
            continue
        if name not in cleaned or cleaned[name] < value:
            cleaned[name] = value

    return EmotionVector(cleaned)


def get_top_emotions(vector: Mapping, n: int = 3) -> List[Tuple[str, float]]:
    """
    Retorna las n emociones con mayor confianza.

    Útil para mostrar un desglose compacto o para logging.

    Example:
        >>> get_top_emotions(normalize_emotions({"happy": 80, "calm": 12, "sad": 3}), n=2)
        [('happy', 80.0), ('calm', 12.0)]
    """
    if n <= 0:
        return []
    vector = vector if isinstance(vector, EmotionVector) else normalize_emotions(vector)
    return list(vector.items())[:n]
