"""
Blueprint para endpoints de salud y monitoreo de la API.

Proporciona endpoints para verificar el estado del servicio.
"""

from flask import Blueprint, jsonify, current_app

health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health_check():
    """
    Endpoint de verificación de estado del servicio.

    No fuerza la carga del catálogo; solo informa si ya está en caché.

    Returns:
        JSON con status "ok" y código HTTP 200

    Example:
        GET /health

        Response:
        {
            "status": "ok",
            "catalog_loaded": false
        }
    """
    provider = current_app.config.get('CATALOG_PROVIDER')
    return jsonify({
        'status': 'ok',
        'catalog_loaded': bool(provider is not None and provider.is_loaded)
    }), 200
