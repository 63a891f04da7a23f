"""
Tablas estáticas de recomendación por categoría de mood.

Los perfiles del catálogo son muchos y de nombre libre ("Pure Joy",
"Quiet Storm", ...). Para recomendar se reducen a un conjunto cerrado de
categorías (MoodCategory), cada una con:
    - Rangos objetivo de audio features (valence, energy, danceability,
      acousticness, tempo, loudness), en las mismas unidades que usan las
      APIs de música (0-1, BPM y dB)
    - Géneros asociados, en orden de preferencia
    - Afinidad con cada categoría de evento (0-1)
    - Frases base para el texto de razonamiento

Resolución perfil -> categoría (resolve_category), en orden:
    1. El label del perfil coincide con el nombre de una categoría
    2. El pattern_type aparece en PATTERN_CATEGORIES
    3. La primera emoción (triggers y luego condiciones) aparece en
       EMOTION_CATEGORIES
    4. CALM por defecto
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..mood.profile import MoodProfile
from ..emotion.schema import clean_label


class MoodCategory(str, Enum):
    HAPPY = "happy"
    SAD = "sad"
    ANGRY = "angry"
    CALM = "calm"
    ANXIOUS = "anxious"
    EXCITED = "excited"


class RecommendationStrategy(str, Enum):
    CONTRAST_BOOST = "CONTRAST_BOOST"
    MOOD_REINFORCEMENT = "MOOD_REINFORCEMENT"
    PERSONAL_TASTE = "PERSONAL_TASTE"
    PERFECT_MATCH = "PERFECT_MATCH"
    DISCOVERY = "DISCOVERY"


@dataclass(frozen=True)
class FeatureRange:
    """
    Rango objetivo de una audio feature.

    Attributes:
        min (float): Límite inferior
        max (float): Límite superior
        target (float): Valor objetivo dentro del rango
    """

    min: float
    max: float
    target: float

    @classmethod
    def around(cls, low: float, high: float) -> "FeatureRange":
        """Rango con objetivo en el punto medio."""
        return cls(low, high, (low + high) / 2.0)

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2.0

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def to_dict(self) -> Dict[str, float]:
        return {'min': self.min, 'max': self.max, 'target': self.target}


# Orden fijo de features en la salida
AUDIO_FEATURES: Tuple[str, ...] = (
    "valence",
    "energy",
    "danceability",
    "acousticness",
    "tempo",
    "loudness",
)

# Rangos por categoría. El objetivo es siempre el punto medio del rango:
#   valence / energy / danceability / acousticness en [0, 1]
#   tempo en BPM, loudness en dB (negativo)
AUDIO_FEATURE_TABLE: Dict[MoodCategory, Dict[str, FeatureRange]] = {
    # Alta valencia, energía media-alta, bailable
    MoodCategory.HAPPY: {
        "valence": FeatureRange.around(0.6, 1.0),
        "energy": FeatureRange.around(0.5, 0.9),
        "danceability": FeatureRange.around(0.55, 0.9),
        "acousticness": FeatureRange.around(0.0, 0.4),
        "tempo": FeatureRange.around(100.0, 140.0),
        "loudness": FeatureRange.around(-9.0, -4.0),
    },
    # Baja valencia y energía, acústica y lenta
    MoodCategory.SAD: {
        "valence": FeatureRange.around(0.0, 0.35),
        "energy": FeatureRange.around(0.1, 0.45),
        "danceability": FeatureRange.around(0.1, 0.45),
        "acousticness": FeatureRange.around(0.5, 1.0),
        "tempo": FeatureRange.around(60.0, 95.0),
        "loudness": FeatureRange.around(-18.0, -8.0),
    },
    # Baja valencia, energía máxima, rápida y fuerte
    MoodCategory.ANGRY: {
        "valence": FeatureRange.around(0.05, 0.4),
        "energy": FeatureRange.around(0.75, 1.0),
        "danceability": FeatureRange.around(0.3, 0.65),
        "acousticness": FeatureRange.around(0.0, 0.2),
        "tempo": FeatureRange.around(120.0, 180.0),
        "loudness": FeatureRange.around(-7.0, -2.0),
    },
    # Valencia neutra, energía baja, acústica y suave
    MoodCategory.CALM: {
        "valence": FeatureRange.around(0.3, 0.7),
        "energy": FeatureRange.around(0.05, 0.4),
        "danceability": FeatureRange.around(0.2, 0.5),
        "acousticness": FeatureRange.around(0.5, 1.0),
        "tempo": FeatureRange.around(60.0, 100.0),
        "loudness": FeatureRange.around(-20.0, -10.0),
    },
    # Música que calma: energía baja sin caer en lo triste
    MoodCategory.ANXIOUS: {
        "valence": FeatureRange.around(0.25, 0.55),
        "energy": FeatureRange.around(0.15, 0.45),
        "danceability": FeatureRange.around(0.2, 0.5),
        "acousticness": FeatureRange.around(0.4, 0.9),
        "tempo": FeatureRange.around(65.0, 100.0),
        "loudness": FeatureRange.around(-18.0, -9.0),
    },
    # Valencia alta, energía y bailabilidad máximas
    MoodCategory.EXCITED: {
        "valence": FeatureRange.around(0.55, 0.95),
        "energy": FeatureRange.around(0.75, 1.0),
        "danceability": FeatureRange.around(0.65, 0.95),
        "acousticness": FeatureRange.around(0.0, 0.25),
        "tempo": FeatureRange.around(118.0, 150.0),
        "loudness": FeatureRange.around(-7.0, -2.0),
    },
}

# Géneros por categoría, en orden de preferencia
CATEGORY_GENRES: Dict[MoodCategory, List[str]] = {
    MoodCategory.HAPPY: ["pop", "dance", "disco"],
    MoodCategory.SAD: ["acoustic", "piano", "ambient"],
    MoodCategory.ANGRY: ["metal", "rock", "hardcore"],
    MoodCategory.CALM: ["classical", "chill", "lofi"],
    MoodCategory.ANXIOUS: ["ambient", "meditation", "soft rock"],
    MoodCategory.EXCITED: ["edm", "hip-hop", "trap"],
}

# Categorías de evento conocidas
EVENT_CATEGORIES: Tuple[str, ...] = (
    "concert",
    "festival",
    "club",
    "acoustic",
    "jazz",
    "classical",
    "wellness",
    "comedy",
    "art",
)

# Afinidad mood -> categoría de evento. Una categoría ausente vale 0.
EVENT_AFFINITY: Dict[MoodCategory, Dict[str, float]] = {
    MoodCategory.HAPPY: {
        "festival": 1.0, "club": 0.9, "concert": 0.85, "comedy": 0.7, "art": 0.5,
        "jazz": 0.4, "acoustic": 0.35, "classical": 0.2, "wellness": 0.2,
    },
    MoodCategory.SAD: {
        "acoustic": 1.0, "jazz": 0.85, "classical": 0.75, "art": 0.6, "wellness": 0.5,
        "concert": 0.35, "comedy": 0.3, "festival": 0.15, "club": 0.1,
    },
    MoodCategory.ANGRY: {
        "concert": 1.0, "club": 0.7, "festival": 0.6, "comedy": 0.3, "wellness": 0.3,
        "acoustic": 0.15, "jazz": 0.15, "classical": 0.1, "art": 0.1,
    },
    MoodCategory.CALM: {
        "classical": 1.0, "wellness": 0.9, "art": 0.75, "jazz": 0.7, "acoustic": 0.65,
        "concert": 0.3, "comedy": 0.3, "festival": 0.1, "club": 0.05,
    },
    MoodCategory.ANXIOUS: {
        "wellness": 1.0, "acoustic": 0.85, "jazz": 0.65, "classical": 0.6, "art": 0.55,
        "comedy": 0.4, "concert": 0.25, "festival": 0.1, "club": 0.1,
    },
    MoodCategory.EXCITED: {
        "festival": 1.0, "club": 1.0, "concert": 0.9, "comedy": 0.5, "art": 0.3,
        "jazz": 0.3, "acoustic": 0.15, "classical": 0.1, "wellness": 0.1,
    },
}

# Primera frase del razonamiento por categoría
REASONING_TEMPLATES: Dict[MoodCategory, str] = {
    MoodCategory.HAPPY: "You're feeling great! Let's amplify that joy with upbeat music.",
    MoodCategory.SAD: "Sometimes we need music that understands our feelings.",
    MoodCategory.ANGRY: "Channel that energy with powerful, intense music.",
    MoodCategory.CALM: "Perfect time for peaceful, soothing sounds.",
    MoodCategory.ANXIOUS: "Calming music can help ease worried thoughts.",
    MoodCategory.EXCITED: "Your energy is electric! Let's match it with high-energy beats.",
}
DEFAULT_REASONING = "Great mood for discovering new music!"
GENRE_CLAUSE = " Since you love {genre}, I've found something that blends perfectly with your taste."
ARTIST_CLAUSE = " Fans of {artist} often enjoy this style too."

# Artista comodín que no aporta información
PLACEHOLDER_ARTIST = "various artists"

# pattern_type (minúsculas) -> categoría. Los patrones mixtos ("contrast
# blend", "dominant + shadow", ...) no están y se resuelven por emoción.
PATTERN_CATEGORIES: Dict[str, MoodCategory] = {
    "uplifted": MoodCategory.HAPPY,
    "reflective blend": MoodCategory.CALM,
    "melancholic peace": MoodCategory.SAD,
    "subtle tension": MoodCategory.ANXIOUS,
    "fog state": MoodCategory.CALM,
    "disoriented state": MoodCategory.ANXIOUS,
    "balanced": MoodCategory.CALM,
}

# Etiquetas de emoción (detectores cloud y DeepFace) -> categoría
EMOTION_CATEGORIES: Dict[str, MoodCategory] = {
    "happy": MoodCategory.HAPPY,
    "sad": MoodCategory.SAD,
    "angry": MoodCategory.ANGRY,
    "disgusted": MoodCategory.ANGRY,
    "disgust": MoodCategory.ANGRY,
    "calm": MoodCategory.CALM,
    "neutral": MoodCategory.CALM,
    "confused": MoodCategory.ANXIOUS,
    "fear": MoodCategory.ANXIOUS,
    "anxious": MoodCategory.ANXIOUS,
    "surprised": MoodCategory.EXCITED,
    "surprise": MoodCategory.EXCITED,
    "excited": MoodCategory.EXCITED,
}

DEFAULT_CATEGORY = MoodCategory.CALM

# Reglas de estrategia: (categoría, género del usuario) -> estrategia
STRATEGY_RULES: Tuple[Tuple[MoodCategory, str, RecommendationStrategy], ...] = (
    (MoodCategory.SAD, "melancholy", RecommendationStrategy.CONTRAST_BOOST),
    (MoodCategory.HAPPY, "pop", RecommendationStrategy.MOOD_REINFORCEMENT),
    (MoodCategory.ANGRY, "metal", RecommendationStrategy.PERSONAL_TASTE),
    (MoodCategory.CALM, "classical", RecommendationStrategy.PERFECT_MATCH),
)


def category_for_emotion(emotion: str) -> Optional[MoodCategory]:
    """Categoría de una etiqueta de emoción, o None si no se reconoce."""
    return EMOTION_CATEGORIES.get(clean_label(emotion))


def resolve_category(profile: Optional[MoodProfile]) -> MoodCategory:
    """
    Reduce un perfil del catálogo a una MoodCategory.

    Args:
        profile (MoodProfile | None): Perfil clasificado

    Returns:
        MoodCategory: Categoría resuelta; CALM si nada coincide

    Examples:
        >>> resolve_category(MoodProfile(label="Happy"))
        <MoodCategory.HAPPY: 'happy'>
        >>> resolve_category(MoodProfile(label="Quiet Storm", emotion_triggers=("angry",)))
        <MoodCategory.ANGRY: 'angry'>
    """
    if profile is None:
        return DEFAULT_CATEGORY

    label = profile.label.strip().lower()
    for category in MoodCategory:
        if label == category.value:
            return category

    pattern = profile.pattern_type.strip().lower()
    if pattern in PATTERN_CATEGORIES:
        return PATTERN_CATEGORIES[pattern]

    for emotion in list(profile.emotion_triggers) + list(profile.percent_conditions):
        category = category_for_emotion(emotion)
        if category is not None:
            return category

    return DEFAULT_CATEGORY
