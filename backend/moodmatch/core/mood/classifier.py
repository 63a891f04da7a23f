"""
Clasificador de moods.

Orquesta el catálogo y el scorer para elegir el mood principal (y, si
procede, uno secundario) de un vector emocional.

Flujo (sin estado entre llamadas):
    1. Catálogo vacío                     -> fallback
    2. Puntuar todos los perfiles; quedarse con el mejor
    3. Mejor score >= min_acceptance      -> paso 4; si no -> fallback
    4. Ordenar por score; si el segundo alcanza primary * complex_band el
       mood es "complex" (principal + secundario), si no "simple"

Fallback (nunca es un error, es un resultado válido y terminal):
    - Vector no vacío -> perfil sintético "Emotion Drift" basado en la
      emoción dominante
    - Vector vacío    -> perfil sintético "Neutral Balance", confianza 0

La clasificación es determinista: mismos perfiles y mismo vector producen
el mismo resultado. Los empates se resuelven por orden del catálogo.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional

from ..emotion.schema import EmotionVector, normalize_emotions
from ..utils import clamp
from .catalog import CatalogProvider
from .profile import MoodProfile
from .scorer import DEFAULT_SETTINGS, ScoringSettings, compatibility_score, score_catalog

logger = logging.getLogger(__name__)

EMOTION_DRIFT_LABEL = "Emotion Drift"
NEUTRAL_BALANCE_LABEL = "Neutral Balance"


class Complexity(str, Enum):
    SIMPLE = "simple"
    COMPLEX = "complex"


@dataclass(frozen=True)
class ClassifiedMood:
    """
    Resultado de una clasificación.

    Attributes:
        primary (str): Label del perfil ganador (o del fallback)
        secondary (Optional[str]): Label del segundo perfil si el mood es complejo
        confidence (float): Score del ganador, o confianza de la emoción
                            dominante / 100 en el fallback "Emotion Drift"
        complexity (Complexity): SIMPLE o COMPLEX
        raw_emotions (EmotionVector): Vector normalizado usado
        profile (MoodProfile): Perfil ganador o sintetizado
        secondary_profile (Optional[MoodProfile]): Perfil secundario
        is_fallback (bool): True si el perfil es sintético
    """

    primary: str
    confidence: float
    complexity: Complexity
    raw_emotions: EmotionVector
    profile: MoodProfile
    secondary: Optional[str] = None
    secondary_profile: Optional[MoodProfile] = None
    is_fallback: bool = False

    @property
    def is_complex(self) -> bool:
        return self.complexity == Complexity.COMPLEX

    def to_dict(self) -> Dict:
        return {
            'primary': self.primary,
            'secondary': self.secondary,
            'confidence': self.confidence,
            'complexity': self.complexity.value,
            'raw_emotions': self.raw_emotions.to_dict(),
            'profile': self.profile.to_dict(),
            'is_fallback': self.is_fallback,
        }


def emotion_drift_profile(emotion: str, confidence: float, ratio: float = 0.8) -> MoodProfile:
    """
    Perfil sintético para vectores que ningún perfil del catálogo explica.

    Se construye sobre la emoción dominante, con una condición implícita al
    80% de su confianza observada: es autoconsistente pero no se reutiliza
    tal cual como perfil del catálogo.
    """
    return MoodProfile(
        label=EMOTION_DRIFT_LABEL,
        description=f"A unique emotional state dominated by {emotion}.",
        emotion_triggers=(emotion,),
        percent_conditions={emotion: confidence * ratio},
        pattern_type="Adaptive",
        quotes=(
            "Every emotion is temporary, but each one teaches us something.",
            "Your feelings are valid, even when they're hard to categorize.",
            "Sometimes the most interesting emotions are the ones that don't fit into boxes.",
        ),
        music_tags=("adaptive", "introspective", "unique"),
        suggestion_note="Your emotional state is unique - exploring diverse music might help you discover what resonates.",
    )


def neutral_balance_profile() -> MoodProfile:
    """Perfil sintético para vectores vacíos (sin señal)."""
    return MoodProfile(
        label=NEUTRAL_BALANCE_LABEL,
        description="A balanced emotional state with no dominant feelings.",
        emotion_triggers=("calm",),
        percent_conditions={},
        pattern_type="Balanced",
        quotes=(
            "In stillness, we find our center.",
            "Peace is not the absence of emotion, but the presence of balance.",
            "Sometimes the best state is simply being present.",
        ),
        music_tags=("ambient", "peaceful", "neutral"),
        suggestion_note="You're in a balanced state - gentle, ambient music might complement your calm energy.",
    )


class MoodClassifier:
    """
    Clasificador de vectores emocionales en perfiles de mood.

    El catálogo se inyecta por constructor para poder probar el
    clasificador con catálogos sintéticos.

    Attributes:
        provider (CatalogProvider): Fuente de perfiles
        settings (ScoringSettings): Umbrales y constantes heurísticas

    Example:
        >>> classifier = MoodClassifier(CatalogProvider())
        >>> mood = classifier.classify({"HAPPY": 85.0, "SAD": 5.0, "SURPRISED": 40.0})
        >>> mood.primary, mood.complexity.value
        ('Pure Joy', 'simple')
    """

    def __init__(
        self,
        provider: CatalogProvider,
        settings: ScoringSettings = DEFAULT_SETTINGS,
        scorer=compatibility_score
    ):
        """
        Args:
            provider (CatalogProvider): Proveedor del catálogo
            settings (ScoringSettings): Constantes heurísticas
            scorer (callable): Función (emotions, profile, settings) -> float.
                               Por defecto compatibility_score.
        """
        self.provider = provider
        self.settings = settings
        self.scorer = scorer

    def classify(self, emotions: Optional[Mapping]) -> ClassifiedMood:
        """
        Clasifica un vector emocional crudo o ya normalizado.

        La normalización se aplica siempre (es idempotente), así que el
        origen del vector es indiferente.

        Args:
            emotions (Mapping | None): etiqueta -> confianza (0-100)

        Returns:
            ClassifiedMood: Resultado; nunca lanza excepciones para entradas
                            con forma de diccionario
        """
        vector = normalize_emotions(emotions)
        profiles = self.provider.get_profiles()

        if not profiles:
            logger.info("Catálogo vacío: usando perfil de fallback")
            return self._fallback(vector)

        scored = score_catalog(vector, profiles, self.settings, scorer=self.scorer)

        # sorted() es estable: ante empate gana el perfil que aparece antes
        # en el catálogo, tanto para el principal como para el secundario
        ranked = sorted(scored, key=lambda s: s.score, reverse=True)
        best = ranked[0]

        if best.score < self.settings.min_acceptance:
            logger.info(
                f"Ningún perfil alcanza el umbral "
                f"({best.score:.3f} < {self.settings.min_acceptance}): fallback"
            )
            return self._fallback(vector)

        runner_up = ranked[1] if len(ranked) > 1 else None

        if runner_up is not None and runner_up.score >= best.score * self.settings.complex_band:
            logger.info(
                f"Mood complejo: '{best.profile.label}' ({best.score:.3f}) + "
                f"'{runner_up.profile.label}' ({runner_up.score:.3f})"
            )
            return ClassifiedMood(
                primary=best.profile.label,
                secondary=runner_up.profile.label,
                confidence=best.score,
                complexity=Complexity.COMPLEX,
                raw_emotions=vector,
                profile=best.profile,
                secondary_profile=runner_up.profile,
            )

        logger.info(f"Mood simple: '{best.profile.label}' ({best.score:.3f})")
        return ClassifiedMood(
            primary=best.profile.label,
            confidence=best.score,
            complexity=Complexity.SIMPLE,
            raw_emotions=vector,
            profile=best.profile,
        )

    def _fallback(self, vector: EmotionVector) -> ClassifiedMood:
        dominant = vector.dominant()

        if dominant is None:
            profile = neutral_balance_profile()
            confidence = 0.0
        else:
            emotion, value = dominant
            profile = emotion_drift_profile(emotion, value, self.settings.drift_condition_ratio)
            confidence = clamp(value / 100.0, 0.0, 1.0)

        return ClassifiedMood(
            primary=profile.label,
            confidence=confidence,
            complexity=Complexity.SIMPLE,
            raw_emotions=vector,
            profile=profile,
            is_fallback=True,
        )


def classify_emotions(
    emotions: Optional[Mapping],
    provider: Optional[CatalogProvider] = None,
    settings: ScoringSettings = DEFAULT_SETTINGS
) -> ClassifiedMood:
    """
    Atajo funcional: clasifica un vector con un clasificador desechable.

    Si no se pasa proveedor se usa el catálogo incluido con el paquete
    (se parsea en cada llamada; para uso repetido crear un MoodClassifier).
    """
    classifier = MoodClassifier(provider or CatalogProvider(), settings=settings)
    return classifier.classify(emotions)
