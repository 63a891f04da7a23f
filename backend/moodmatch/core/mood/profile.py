"""
Modelo de perfil de mood y parseo de filas del catálogo.

Un MoodProfile es una plantilla basada en reglas (emociones disparadoras +
umbrales porcentuales) que representa un patrón emocional reconocible,
por ejemplo "Pure Joy" o "Quiet Storm".

Formato de fila del catálogo (CSV con cabecera):
    label, description, emotion_triggers, percent_conditions,
    pattern_type, quotes, music_tags, suggestion_note

    - emotion_triggers: "Happy, Surprised"
    - percent_conditions: "Happy > 70%, Calm >= 15%"
    - quotes: "['Quote one', 'Quote two']" o "Quote one | Quote two"
    - music_tags / suggestion_note: opcionales; si están vacíos se derivan
      del pattern_type
"""

import ast
import random
import re
from types import MappingProxyType
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from ..emotion.schema import clean_label

# Cita genérica cuando la fila no trae ninguna
DEFAULT_QUOTE = "Stay strong, emotions are temporary."

# Columnas obligatorias del CSV
REQUIRED_COLUMNS: Tuple[str, ...] = (
    "label",
    "description",
    "emotion_triggers",
    "percent_conditions",
    "pattern_type",
    "quotes",
)
OPTIONAL_COLUMNS: Tuple[str, ...] = ("music_tags", "suggestion_note")

# "Sad > 21%", "calm >= 15", "Happy>70.5%"
_CONDITION_RE = re.compile(r"^(?P<emotion>[^<>=]+?)\s*>=?\s*(?P<percent>[-+]?\d+(?:\.\d+)?)\s*%?$")

# Tags musicales por tipo de patrón (claves en minúsculas)
PATTERN_MUSIC_TAGS: Dict[str, List[str]] = {
    "contrast blend": ["alternative", "indie rock", "experimental", "art rock"],
    "subtle tension": ["ambient", "post-rock", "minimal", "atmospheric"],
    "uplifted": ["pop", "upbeat", "indie pop", "feel-good"],
    "fog state": ["dream pop", "ethereal", "shoegaze", "ambient"],
    "disoriented state": ["experimental", "electronic", "glitch", "industrial"],
    "reflective blend": ["singer-songwriter", "folk", "acoustic", "contemplative"],
    "melancholic peace": ["neo-classical", "ambient", "melancholic", "peaceful"],
    "blended (triad)": ["progressive", "complex", "multi-genre", "eclectic"],
    "dominant + shadow": ["dynamic", "orchestral", "cinematic", "dramatic"],
}
DEFAULT_MUSIC_TAGS: List[str] = ["chill", "versatile", "adaptive"]

PATTERN_SUGGESTIONS: Dict[str, str] = {
    "contrast blend": "Your emotions are creating an interesting contrast - music that embraces complexity might resonate with you.",
    "subtle tension": "There's an underlying tension in your emotional state - atmospheric music might help you process these feelings.",
    "uplifted": "You're experiencing positive emotional energy - upbeat music can amplify these good vibes.",
    "fog state": "Your emotions are in a dreamy, unclear state - ethereal music might match your current headspace.",
    "disoriented state": "You're feeling emotionally scattered - experimental music might help you explore these complex feelings.",
    "reflective blend": "You're in a contemplative mood - thoughtful, introspective music could complement your state.",
    "melancholic peace": "You're experiencing bittersweet emotions - music that balances sadness and beauty might resonate.",
    "blended (triad)": "You have multiple strong emotions - complex, layered music might match your emotional richness.",
    "dominant + shadow": "You have a strong primary emotion with subtle undertones - dynamic music with depth might suit you.",
}
DEFAULT_SUGGESTION = "Your emotional state is unique - exploring diverse music might help you discover what resonates."


class MalformedRowError(ValueError):
    """Fila del catálogo que no se puede convertir en MoodProfile."""


@dataclass(frozen=True)
class MoodProfile:
    """
    Entrada del catálogo de moods.

    Attributes:
        label (str): Nombre visible y único del perfil
        description (str): Descripción corta
        emotion_triggers (tuple): Emociones cuya mera presencia suma puntos
        percent_conditions (dict): emoción -> confianza mínima requerida
        pattern_type (str): Categoría libre del patrón
        quotes (tuple): Citas (nunca vacío)
        music_tags (tuple): Géneros/estilos asociados
        suggestion_note (str): Sugerencia en texto libre

    Un perfil sin triggers ni condiciones está permitido pero es inerte:
    puntúa 0 contra cualquier vector.
    """

    label: str
    description: str = ""
    emotion_triggers: Tuple[str, ...] = ()
    percent_conditions: Mapping[str, float] = field(default_factory=dict)
    pattern_type: str = ""
    quotes: Tuple[str, ...] = (DEFAULT_QUOTE,)
    music_tags: Tuple[str, ...] = ()
    suggestion_note: str = ""

    def __post_init__(self):
        # Normalizar colecciones para que el perfil sea realmente inmutable
        triggers = tuple(dict.fromkeys(
            t for t in (clean_label(x) for x in self.emotion_triggers) if t
        ))
        conditions = {clean_label(k): float(v) for k, v in dict(self.percent_conditions).items()}
        quotes = tuple(q for q in self.quotes if q) or (DEFAULT_QUOTE,)
        object.__setattr__(self, 'emotion_triggers', triggers)
        object.__setattr__(self, 'percent_conditions', MappingProxyType(conditions))
        object.__setattr__(self, 'quotes', quotes)
        object.__setattr__(self, 'music_tags', tuple(self.music_tags))

    def __hash__(self) -> int:
        return hash((self.label, self.emotion_triggers, tuple(self.percent_conditions.items())))

    @property
    def is_inert(self) -> bool:
        return not self.emotion_triggers and not self.percent_conditions

    def to_dict(self) -> Dict:
        return {
            'label': self.label,
            'description': self.description,
            'emotion_triggers': list(self.emotion_triggers),
            'percent_conditions': dict(self.percent_conditions),
            'pattern_type': self.pattern_type,
            'quotes': list(self.quotes),
            'music_tags': list(self.music_tags),
            'suggestion_note': self.suggestion_note,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "MoodProfile":
        return cls(
            label=data.get('label', ''),
            description=data.get('description', ''),
            emotion_triggers=tuple(data.get('emotion_triggers') or ()),
            percent_conditions=dict(data.get('percent_conditions') or {}),
            pattern_type=data.get('pattern_type', ''),
            quotes=tuple(data.get('quotes') or ()),
            music_tags=tuple(data.get('music_tags') or ()),
            suggestion_note=data.get('suggestion_note', ''),
        )


def music_tags_for_pattern(pattern_type: str) -> List[str]:
    return list(PATTERN_MUSIC_TAGS.get(pattern_type.strip().lower(), DEFAULT_MUSIC_TAGS))


def suggestion_for_pattern(pattern_type: str) -> str:
    return PATTERN_SUGGESTIONS.get(pattern_type.strip().lower(), DEFAULT_SUGGESTION)


def _split_list(text: str) -> List[str]:
    return [part.strip() for part in text.split(',') if part.strip()]


def parse_percent_conditions(text: str) -> Dict[str, float]:
    """
    Parsea condiciones porcentuales del tipo "Sad > 21%, Surprised > 15%".

    Si una emoción aparece varias veces se conserva el umbral más alto.

    Raises:
        MalformedRowError: Si alguna parte no tiene la forma "emoción > N%"

    Example:
        >>> parse_percent_conditions("Sad > 21%, sad > 30%, Calm >= 5")
        {'sad': 30.0, 'calm': 5.0}
    """
    conditions: Dict[str, float] = {}
    for part in _split_list(text or ""):
        match = _CONDITION_RE.match(part)
        if not match:
            raise MalformedRowError(f"Condición porcentual inválida: '{part}'")
        emotion = clean_label(match.group('emotion'))
        if not emotion:
            raise MalformedRowError(f"Condición sin emoción: '{part}'")
        percent = float(match.group('percent'))
        if emotion not in conditions or conditions[emotion] < percent:
            conditions[emotion] = percent
    return conditions


# Separador entre elementos de una lista de citas entre corchetes
_QUOTE_SEPARATOR_RE = re.compile(r"""['"]\s*,\s*['"]""")


def _split_quote_list(text: str) -> List[str]:
    """
    Parseo tolerante de "['a', 'b']" cuando no es un literal válido (p. ej.
    citas con apóstrofes sin escapar: "['Don't give up.']").
    """
    inner = text.strip()
    if inner.startswith('['):
        inner = inner[1:]
    if inner.endswith(']'):
        inner = inner[:-1]
    parts = (part.strip().strip('\'"').strip() for part in _QUOTE_SEPARATOR_RE.split(inner))
    return [part for part in parts if part]


def parse_quotes(text: str) -> List[str]:
    """
    Parsea la columna de citas.

    Acepta una lista literal entre corchetes ("['a', 'b']") o texto
    separado por '|'. Una lista entre corchetes que no es un literal
    válido se separa por "', '" en lugar de descartar la fila; si no queda
    ninguna cita, el perfil usa DEFAULT_QUOTE.

    Example:
        >>> parse_quotes("['Don't give up.', 'Keep going.']")
        ["Don't give up.", 'Keep going.']
    """
    text = (text or "").strip()
    if not text:
        return []

    if text.startswith('['):
        try:
            value = ast.literal_eval(text)
        except (ValueError, SyntaxError):
            return _split_quote_list(text)
        if not isinstance(value, (list, tuple)) or not all(isinstance(q, str) for q in value):
            return _split_quote_list(text)
        return [q.strip() for q in value if q.strip()]

    return [q.strip() for q in text.split('|') if q.strip()]


def parse_profile_row(row: Mapping) -> MoodProfile:
    """
    Convierte una fila del CSV (dict de csv.DictReader) en un MoodProfile.

    Args:
        row (Mapping): Fila con las columnas REQUIRED_COLUMNS y, opcionalmente,
                       OPTIONAL_COLUMNS

    Returns:
        MoodProfile: Perfil parseado

    Raises:
        MalformedRowError: Si la fila tiene columnas de más o de menos, no
                           tiene label o alguna columna no se puede parsear
    """
    if row.get(None):
        raise MalformedRowError(f"Columnas sobrantes: {row.get(None)!r}")

    missing = [col for col in REQUIRED_COLUMNS if row.get(col) is None]
    if missing:
        raise MalformedRowError(f"Faltan columnas: {missing}")

    label = row['label'].strip()
    if not label:
        raise MalformedRowError("La fila no tiene label")

    pattern_type = row['pattern_type'].strip()
    music_tags = _split_list(row.get('music_tags') or "") or music_tags_for_pattern(pattern_type)
    suggestion = (row.get('suggestion_note') or "").strip() or suggestion_for_pattern(pattern_type)

    return MoodProfile(
        label=label,
        description=row['description'].strip(),
        emotion_triggers=tuple(_split_list(row['emotion_triggers'])),
        percent_conditions=parse_percent_conditions(row['percent_conditions']),
        pattern_type=pattern_type,
        quotes=tuple(parse_quotes(row['quotes'])),
        music_tags=tuple(music_tags),
        suggestion_note=suggestion,
    )


def pick_quote(profile: MoodProfile, seed: Optional[int] = None) -> str:
    """
    Elige una cita del perfil.

    Con la misma semilla se obtiene siempre la misma cita.
    """
    if not profile.quotes:
        return "Take a moment to breathe and feel your emotions."
    rng = random.Random(seed)
    return rng.choice(profile.quotes)
