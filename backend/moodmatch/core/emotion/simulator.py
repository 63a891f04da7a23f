"""
Simulador local de detección emocional.

Produce vectores crudos con la misma forma que los de un detector facial
real (etiquetas en mayúsculas, confianzas 0-100) para demos y pruebas sin
cámara ni credenciales en la nube.
"""

import random
from typing import Dict, List, Optional

# Etiquetas tal como las reporta el detector en la nube
SIMULATED_EMOTIONS: List[str] = [
    "HAPPY",
    "SAD",
    "ANGRY",
    "CALM",
    "FEAR",
    "SURPRISED",
    "CONFUSED",
    "DISGUSTED",
]


def simulate_emotions(
    seed: Optional[int] = None,
    dominant: Optional[str] = None
) -> Dict[str, float]:
    """
    Genera un vector emocional crudo simulado.

    Una emoción dominante recibe una confianza alta (70-95) y el resto
    valores de fondo bajos (0-20), algunos por debajo del umbral de ruido.

    Args:
        seed (Optional[int]): Semilla para reproducibilidad
        dominant (Optional[str]): Emoción dominante a forzar. Si es None se
                                  elige al azar entre SIMULATED_EMOTIONS.

    Returns:
        Dict[str, float]: Vector crudo etiqueta -> confianza

    Example:
        >>> raw = simulate_emotions(seed=42)
        >>> raw == simulate_emotions(seed=42)
        True
    """
    rng = random.Random(seed)

    if dominant is None:
        dominant = rng.choice(SIMULATED_EMOTIONS)
    dominant = dominant.strip().upper()

    emotions: Dict[str, float] = {}
    for label in SIMULATED_EMOTIONS:
        emotions[label] = round(rng.uniform(0.0, 20.0), 2)

    emotions[dominant] = round(rng.uniform(70.0, 95.0), 2)
    return emotions
