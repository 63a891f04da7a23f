"""
Blueprint para endpoints de clasificación de moods y recomendación.

Proporciona endpoints para clasificar un vector emocional (enviado por el
cliente o simulado), obtener parámetros de recomendación y consultar el
catálogo de perfiles.
"""

from flask import Blueprint, jsonify, current_app, request

from ..core.emotion import simulate_emotions, SIMULATED_EMOTIONS
from ..core.mood import MoodClassifier, pick_quote
from ..core.recommendation import EventCandidate, RecommendationMapper, TasteSignal

mood_bp = Blueprint('mood', __name__, url_prefix='/mood')


class RequestError(ValueError):
    """Petición con forma inválida (se responde con 400)."""

    def __init__(self, error: str, message: str):
        super().__init__(message)
        self.error = error
        self.message = message


def _get_classifier() -> MoodClassifier:
    """Clasificador sobre el catálogo compartido de la app."""
    return MoodClassifier(
        current_app.config['CATALOG_PROVIDER'],
        settings=current_app.config['SCORING_SETTINGS']
    )


def _get_mapper() -> RecommendationMapper:
    return RecommendationMapper(
        blend_weight=current_app.config['BLEND_WEIGHT'],
        event_weights=current_app.config['EVENT_WEIGHTS']
    )


def _json_body() -> dict:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise RequestError(
            'Body JSON inválido',
            'El cuerpo de la petición debe ser un objeto JSON'
        )
    return body


def _emotions_from(body: dict) -> dict:
    emotions = body.get('emotions')
    if not isinstance(emotions, dict):
        raise RequestError(
            'Falta el campo "emotions"',
            '"emotions" debe ser un objeto etiqueta -> confianza (0-100)'
        )
    return emotions


def _optional_int(value, name: str):
    if value is None:
        return None
    try:
        if isinstance(value, bool):
            raise ValueError(value)
        return int(value)
    except (TypeError, ValueError):
        raise RequestError(f'{name} debe ser un entero', f'{name} inválido: {value}')


def _error_response(error: RequestError):
    return jsonify({'error': error.error, 'message': error.message}), 400


def _internal_error(endpoint: str, title: str, e: Exception):
    # Log del error para debugging
    current_app.logger.error(f"Error en {endpoint}: {str(e)}", exc_info=True)

    # En producción, no exponer detalles internos
    error_message = str(e) if current_app.debug else 'Error interno del servidor'
    return jsonify({'error': title, 'message': error_message}), 500


def _mood_response(mood, seed=None) -> dict:
    response = mood.to_dict()
    response['quote'] = pick_quote(mood.profile, seed)
    response['suggestion_note'] = mood.profile.suggestion_note
    return response


@mood_bp.route('/classify', methods=['POST'])
def classify():
    """
    Clasifica un vector emocional en un perfil de mood.

    JSON Body:
        emotions (object): etiqueta -> confianza (0-100), con cualquier
                           capitalización ("HAPPY", "EmotionName.SAD", ...)
        seed (int, opcional): Semilla para elegir la cita del perfil

    Returns:
        JSON con el mood clasificado

    Example:
        POST /mood/classify
        {"emotions": {"HAPPY": 85, "SAD": 5, "SURPRISED": 40}}

        Response:
        {
            "primary": "Pure Joy",
            "secondary": null,
            "confidence": 0.475,
            "complexity": "simple",
            ...
        }

    Error cases:
        - 400: Body inválido o sin "emotions"
        - 500: Error interno del servidor
    """
    try:
        body = _json_body()
        emotions = _emotions_from(body)
        seed = _optional_int(body.get('seed'), 'seed')
    except RequestError as e:
        return _error_response(e)

    try:
        mood = _get_classifier().classify(emotions)
        return jsonify(_mood_response(mood, seed)), 200
    except Exception as e:
        return _internal_error('/mood/classify', 'Error al clasificar el mood', e)


@mood_bp.route('/recommend', methods=['POST'])
def recommend():
    """
    Clasifica un vector emocional y calcula parámetros de recomendación.

    JSON Body:
        emotions (object): etiqueta -> confianza (0-100)
        taste (object, opcional): {preferredGenres, preferredArtists,
                                   preferredEventCategories, eventInteractions}
        events (array, opcional): [{id, name, category, distance,
                                    daysUntil, genres}, ...]

    Returns:
        JSON {"mood": ..., "recommendation": ...}

    Error cases:
        - 400: Body, taste o events con forma inválida
        - 500: Error interno del servidor
    """
    try:
        body = _json_body()
        emotions = _emotions_from(body)
        seed = _optional_int(body.get('seed'), 'seed')

        try:
            taste = TasteSignal.from_dict(body.get('taste'))
        except ValueError as e:
            raise RequestError('Campo "taste" inválido', str(e))

        raw_events = body.get('events')
        if raw_events is None:
            raw_events = []
        if not isinstance(raw_events, list):
            raise RequestError('Campo "events" inválido', '"events" debe ser una lista de objetos')
        try:
            events = [EventCandidate.from_dict(item) for item in raw_events]
        except ValueError as e:
            raise RequestError('Campo "events" inválido', str(e))
    except RequestError as e:
        return _error_response(e)

    try:
        mood = _get_classifier().classify(emotions)
        params = _get_mapper().map(mood, None if taste.is_empty else taste, events)

        current_app.logger.info(
            f"Recomendación: mood '{mood.primary}' -> {params.category.value} "
            f"({params.strategy.value})"
        )
        return jsonify({
            'mood': _mood_response(mood, seed),
            'recommendation': params.to_dict(),
        }), 200
    except Exception as e:
        return _internal_error('/mood/recommend', 'Error al generar la recomendación', e)


@mood_bp.route('/profiles', methods=['GET'])
def list_profiles():
    """
    Lista los perfiles del catálogo cargado.

    Query Parameters (opcionales):
        details (bool): "true" para incluir los perfiles completos

    Returns:
        JSON {"count": n, "labels": [...]} (+ "profiles" con details=true)
    """
    try:
        profiles = current_app.config['CATALOG_PROVIDER'].get_profiles()
        response = {
            'count': len(profiles),
            'labels': [p.label for p in profiles],
        }
        if request.args.get('details', '').lower() in ('1', 'true', 'yes'):
            response['profiles'] = [p.to_dict() for p in profiles]
        return jsonify(response), 200
    except Exception as e:
        return _internal_error('/mood/profiles', 'Error al leer el catálogo', e)


@mood_bp.route('/simulate', methods=['POST'])
def simulate():
    """
    Clasifica un vector emocional simulado (sin detector real).

    Query Parameters (opcionales):
        seed (int): Semilla aleatoria para reproducibilidad
        dominant (str): Emoción dominante (HAPPY, SAD, ANGRY, CALM, FEAR,
                        SURPRISED, CONFUSED, DISGUSTED)

    Returns:
        JSON {"emotions": {...vector crudo...}, "mood": {...}}
    """
    try:
        seed = _optional_int(request.args.get('seed'), 'seed')

        dominant = request.args.get('dominant')
        if dominant is not None and dominant.strip().upper() not in SIMULATED_EMOTIONS:
            raise RequestError(
                'Emoción dominante no válida',
                f'dominant debe ser una de: {SIMULATED_EMOTIONS}'
            )
    except RequestError as e:
        return _error_response(e)

    try:
        raw = simulate_emotions(seed=seed, dominant=dominant)
        mood = _get_classifier().classify(raw)
        current_app.logger.info(f"Vector simulado (seed={seed}) -> '{mood.primary}'")
        return jsonify({
            'emotions': raw,
            'mood': _mood_response(mood, seed),
        }), 200
    except Exception as e:
        return _internal_error('/mood/simulate', 'Error al simular emociones', e)
