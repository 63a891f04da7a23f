"""
Catálogo de perfiles de mood con carga perezosa y caché.

El catálogo se lee una sola vez de un CSV (asset de configuración de solo
lectura) y se mantiene en memoria durante la vida del proceso. Solo se
recarga tras un clear_cache() explícito.

Garantías:
    - Una fila mal formada se descarta con un warning; el resto se carga
    - Un archivo inexistente o corrupto produce un catálogo vacío, nunca
      una excepción (el clasificador recurre entonces al fallback)
    - Las cargas concurrentes se coalescen: un solo hilo parsea, el resto
      espera al lock y lee la caché ya poblada
    - El orden del catálogo es el orden de filas del archivo; es el que
      desempata perfiles con la misma puntuación
"""

import csv
import logging
import threading
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .profile import MoodProfile, MalformedRowError, REQUIRED_COLUMNS, parse_profile_row

logger = logging.getLogger(__name__)

# Catálogo incluido con el paquete: moodmatch/data/mood_profiles.csv
DEFAULT_CATALOG_PATH = Path(__file__).resolve().parents[2] / 'data' / 'mood_profiles.csv'


def load_profiles_from_csv(path: Union[str, Path]) -> List[MoodProfile]:
    """
    Parsea un CSV de perfiles de mood.

    Usa el módulo csv de la librería estándar, que respeta comas y comillas
    dentro de campos entrecomillados.

    Args:
        path (str | Path): Ruta al CSV con cabecera

    Returns:
        List[MoodProfile]: Perfiles en el orden de las filas

    Raises:
        OSError: Si el archivo no se puede abrir
        ValueError: Si la cabecera no contiene las columnas obligatorias
        csv.Error: Si el archivo no es un CSV válido
    """
    profiles: List[MoodProfile] = []
    seen_labels = set()

    with open(path, newline='', encoding='utf-8') as f:
        reader = csv.DictReader(f, skipinitialspace=True)
        header = [h.strip() for h in (reader.fieldnames or [])]
        missing = [col for col in REQUIRED_COLUMNS if col not in header]
        if missing:
            raise ValueError(f"Cabecera del catálogo incompleta, faltan: {missing}")
        reader.fieldnames = header

        for row in reader:
            # reader.line_num apunta a la línea física donde terminó la fila
            line = reader.line_num
            if not any((value or '').strip() for key, value in row.items() if key is not None):
                continue
            try:
                profile = parse_profile_row(row)
            except MalformedRowError as e:
                logger.warning(f"Fila {line} del catálogo descartada: {e}")
                continue
            if profile.label in seen_labels:
                logger.warning(f"Fila {line} del catálogo descartada: label duplicado '{profile.label}'")
                continue
            seen_labels.add(profile.label)
            profiles.append(profile)

    return profiles


class CatalogProvider:
    """
    Proveedor inyectable del catálogo de perfiles.

    Mantiene una caché opcional (None = no cargado) protegida por un lock.
    El primer get_profiles() parsea el origen; los siguientes devuelven la
    lista cacheada sin tomar el lock.

    Attributes:
        source (Path | None): Ruta del CSV. None para proveedores precargados.

    Example:
        >>> provider = CatalogProvider('moodmatch/data/mood_profiles.csv')
        >>> profiles = provider.get_profiles()   # parsea
        >>> profiles = provider.get_profiles()   # caché
        >>> provider.clear_cache()               # la próxima llamada recarga
    """

    def __init__(self, source: Optional[Union[str, Path]] = None, loader=load_profiles_from_csv):
        """
        Args:
            source (str | Path | None): Ruta del CSV. Si es None se usa el
                                        catálogo incluido con el paquete.
            loader (callable): Función path -> List[MoodProfile]. Inyectable
                               para pruebas.
        """
        self.source = Path(source) if source is not None else DEFAULT_CATALOG_PATH
        self._loader = loader
        self._cache: Optional[List[MoodProfile]] = None
        self._lock = threading.Lock()
        self.load_count = 0
        self._preloaded: Optional[List[MoodProfile]] = None

    @classmethod
    def preloaded(cls, profiles: Iterable[MoodProfile]) -> "CatalogProvider":
        """
        Crea un proveedor ya poblado con una lista en memoria.

        La lista es también su origen: tras clear_cache() se vuelve a servir
        la misma lista.
        """
        provider = cls(loader=None)
        provider.source = None
        provider._preloaded = list(profiles)
        provider._cache = list(provider._preloaded)
        return provider

    @property
    def is_loaded(self) -> bool:
        return self._cache is not None

    def get_profiles(self) -> List[MoodProfile]:
        """
        Retorna los perfiles del catálogo, cargándolos la primera vez.

        Nunca lanza excepciones: si el origen falta o está corrupto se
        registra el error y se cachea un catálogo vacío.

        Returns:
            List[MoodProfile]: Copia de la lista cacheada
        """
        cached = self._cache
        if cached is not None:
            return list(cached)

        with self._lock:
            # Double-check: otro hilo pudo haber cargado mientras esperábamos
            if self._cache is None:
                self._cache = self._load()
            return list(self._cache)

    def clear_cache(self):
        """Descarta la caché; la próxima lectura recarga el origen."""
        with self._lock:
            self._cache = None

    def _load(self) -> List[MoodProfile]:
        self.load_count += 1

        if self._preloaded is not None:
            return list(self._preloaded)

        if self.source is None or self._loader is None:
            return []

        logger.info(f"Cargando perfiles de mood desde {self.source}")
        try:
            profiles = self._loader(self.source)
        except (OSError, ValueError, csv.Error) as e:
            logger.error(f"No se pudo cargar el catálogo de moods ({self.source}): {e}")
            return []

        logger.info(f"Catálogo cargado: {len(profiles)} perfil(es)")
        return profiles
