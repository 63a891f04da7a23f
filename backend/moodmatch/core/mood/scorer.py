"""
Scorer de compatibilidad entre un vector emocional y un perfil de mood.

Es un scorer heurístico de evidencia ponderada, no un clasificador
probabilístico. Premia tanto la presencia cualitativa de una emoción como
que su confianza supere un umbral, con crédito parcial cerca del límite:
las salidas de un detector facial son ruidosas y un pasa/no-pasa estricto
en el umbral sería frágil.

Algoritmo (por perfil):
    - Cada trigger cuenta como un check; si la emoción está presente
      (cualquier magnitud) suma trigger_bonus
    - Cada condición porcentual cuenta como un check:
        * actual >= requerido       -> met_bonus + (actual - requerido) / 100
        * actual / requerido >= 0.7 -> partial_factor * (actual / requerido)
        * en otro caso              -> 0
    - El total se divide entre el número de checks, para que los perfiles
      con más condiciones no salgan beneficiados
    - Un perfil sin checks (inerte) puntúa 0
"""

import logging
from dataclasses import dataclass
from typing import List, Mapping, NamedTuple, Sequence

from .profile import MoodProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoringSettings:
    """
    Constantes heurísticas del scorer y del clasificador.

    No tienen una derivación documentada; se exponen como parámetros
    ajustables en lugar de darlas por óptimas.

    Attributes:
        trigger_bonus (float): Puntos por trigger presente
        met_bonus (float): Puntos base por condición cumplida
        partial_ratio (float): Ratio actual/requerido mínimo para crédito parcial
        partial_factor (float): Multiplicador del crédito parcial
        min_acceptance (float): Puntuación mínima para aceptar un perfil
        complex_band (float): Fracción del score principal que debe alcanzar
                              el segundo perfil para un mood complejo
        drift_condition_ratio (float): Umbral implícito del fallback
                                       "Emotion Drift" respecto a la
                                       confianza observada
    """

    trigger_bonus: float = 0.3
    met_bonus: float = 0.5
    partial_ratio: float = 0.7
    partial_factor: float = 0.2
    min_acceptance: float = 0.3
    complex_band: float = 0.7
    drift_condition_ratio: float = 0.8


DEFAULT_SETTINGS = ScoringSettings()


class ScoredProfile(NamedTuple):
    profile: MoodProfile
    score: float


def compatibility_score(
    emotions: Mapping[str, float],
    profile: MoodProfile,
    settings: ScoringSettings = DEFAULT_SETTINGS
) -> float:
    """
    Calcula la compatibilidad entre un vector normalizado y un perfil.

    Args:
        emotions (Mapping[str, float]): Vector normalizado (etiquetas en
                                        minúsculas, confianzas 0-100)
        profile (MoodProfile): Perfil del catálogo
        settings (ScoringSettings): Constantes heurísticas

    Returns:
        float: Puntuación, normalmente en [0, 1]. El bonus por exceso sobre
               el umbral no está acotado, pero con confianzas <= 100 es
               pequeño en la práctica.

    Example:
        >>> profile = MoodProfile(label="Pure Joy", emotion_triggers=("excited",),
        ...                       percent_conditions={"happy": 70})
        >>> round(compatibility_score({"happy": 85, "excited": 40}, profile), 3)
        0.475
    """
    score = 0.0
    total_checks = 0

    for trigger in profile.emotion_triggers:
        total_checks += 1
        if trigger in emotions:
            score += settings.trigger_bonus

    for emotion, required in profile.percent_conditions.items():
        total_checks += 1
        if emotion not in emotions:
            continue

        actual = emotions[emotion]
        if actual >= required:
            score += settings.met_bonus + (actual - required) / 100.0
            continue
        if required <= 0:
            continue

        ratio = actual / required
        if ratio >= settings.partial_ratio:
            score += settings.partial_factor * ratio

    if total_checks == 0:
        return score

    return score / total_checks


def score_catalog(
    emotions: Mapping[str, float],
    profiles: Sequence[MoodProfile],
    settings: ScoringSettings = DEFAULT_SETTINGS,
    scorer=compatibility_score
) -> List[ScoredProfile]:
    """
    Puntúa todos los perfiles, conservando el orden del catálogo.

    Args:
        scorer (callable): Función (emotions, profile, settings) -> float

    Returns:
        List[ScoredProfile]: Un elemento por perfil, en el mismo orden
    """
    scored: List[ScoredProfile] = []
    for profile in profiles:
        score = scorer(emotions, profile, settings)
        logger.debug(f"Perfil '{profile.label}' score: {score:.3f}")
        scored.append(ScoredProfile(profile, score))
    return scored
