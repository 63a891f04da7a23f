"""
Aplicación principal del backend - MoodMatch.

Este módulo implementa la API REST Flask que expone el motor de
clasificación de moods y recomendación.

La API proporciona endpoints para:
- Clasificar un vector emocional en un perfil de mood
- Obtener parámetros de recomendación (audio features, géneros, eventos)
- Consultar el catálogo de perfiles cargado
- Clasificar un vector simulado (sin detector real)
- Monitoreo de salud del servicio

IMPORTANTE: El catálogo de perfiles NO se parsea al arrancar.
Se carga la primera vez que un endpoint lo necesita y queda en caché.
"""

import os
import logging

from flask import Flask
from flask_cors import CORS

from .core.mood import CatalogProvider, DEFAULT_CATALOG_PATH
from .core.mood.scorer import DEFAULT_SETTINGS
from .core.recommendation import DEFAULT_EVENT_WEIGHTS
from .core.recommendation.mapper import PRIMARY_BLEND_WEIGHT

# Importar blueprints
from .routes import health_bp, mood_bp

from . import __version__

# Configurar logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(config=None):
    """
    Factory function para crear y configurar la aplicación Flask.

    Este patrón Application Factory permite:
    - Crear múltiples instancias de la app (útil para testing)
    - Inyectar un catálogo propio (CATALOG_PROVIDER)

    Args:
        config (dict, optional): Diccionario de configuración custom.
                                Si None, usa configuración por defecto.

    Returns:
        Flask: Aplicación Flask configurada y lista para usar

    Example:
        >>> app = create_app({'MOOD_CATALOG_PATH': 'data/mood_profiles.csv'})
        >>> app.run(debug=True, port=5000)
    """
    app = Flask(__name__)

    # Configuración por defecto
    app.config['MOOD_CATALOG_PATH'] = os.environ.get('MOOD_CATALOG_PATH') or str(DEFAULT_CATALOG_PATH)
    app.config['SCORING_SETTINGS'] = DEFAULT_SETTINGS
    app.config['EVENT_WEIGHTS'] = DEFAULT_EVENT_WEIGHTS
    app.config['BLEND_WEIGHT'] = PRIMARY_BLEND_WEIGHT
    app.config['DEBUG'] = False
    app.config['HOST'] = '0.0.0.0'
    app.config['PORT'] = 5000
    app.config['CATALOG_PROVIDER'] = None

    # Aplicar configuración custom si se proporciona
    if config:
        app.config.update(config)

    # Habilitar CORS para permitir requests desde el frontend
    CORS(app)

    # Un único proveedor por app: el catálogo se carga una vez y se comparte
    # entre requests
    if app.config['CATALOG_PROVIDER'] is None:
        app.config['CATALOG_PROVIDER'] = CatalogProvider(app.config['MOOD_CATALOG_PATH'])
        logger.info(f"Catálogo de moods: {app.config['MOOD_CATALOG_PATH']} (carga diferida)")

    # Registrar blueprints
    app.register_blueprint(health_bp)
    app.register_blueprint(mood_bp)

    logger.info("Blueprints registrados")

    return app


def main():
    """
    Función principal para ejecutar el servidor de desarrollo.

    Para producción, usar un servidor WSGI como Gunicorn.

    Example:
        $ python -m moodmatch.app
    """
    print("=" * 70)
    print(f"MoodMatch - Clasificación de moods y recomendación v{__version__}")
    print("=" * 70)

    app = create_app()

    print("\nEndpoints disponibles:")
    print("  GET  /health           - Verificación de estado")
    print("  POST /mood/classify    - Clasificar un vector emocional")
    print("  POST /mood/recommend   - Mood + parámetros de recomendación")
    print("  GET  /mood/profiles    - Perfiles del catálogo")
    print("  POST /mood/simulate    - Clasificar un vector simulado")
    print("\n" + "=" * 70)
    print(f"Servidor iniciando en http://{app.config['HOST']}:{app.config['PORT']}")
    print("=" * 70 + "\n")

    app.run(
        host=app.config['HOST'],
        port=app.config['PORT'],
        debug=app.config['DEBUG']
    )


if __name__ == "__main__":
    main()
