"""
MoodMatch - Motor de clasificación de moods y recomendación.

Clasifica vectores emocionales (confianzas 0-100 por emoción) en perfiles
de mood de un catálogo CSV y los traduce a parámetros de recomendación
musical y de eventos. La API REST vive en moodmatch.app.
"""

__version__ = "0.4.0"
