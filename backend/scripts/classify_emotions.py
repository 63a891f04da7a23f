#!/usr/bin/env python3
"""
Clasificador de moods por línea de comandos.

Clasifica un vector emocional (pares etiqueta=valor, o un vector simulado)
contra un catálogo de perfiles e imprime el mood y los parámetros de
recomendación resultantes.

Uso:
    python backend/scripts/classify_emotions.py HAPPY=85 SAD=5 SURPRISED=40
    python backend/scripts/classify_emotions.py --simulate --seed 7
    python backend/scripts/classify_emotions.py happy=60 calm=45 --genres pop,jazz --artist "Norah Jones"
    python backend/scripts/classify_emotions.py SAD=70 --catalog data/otro_catalogo.csv --json
"""

import argparse
import json
import logging
import os
import sys

# Añadir el directorio backend al path para poder importar el paquete
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from moodmatch.core.emotion import normalize_emotions, simulate_emotions
from moodmatch.core.mood import CatalogProvider, MoodClassifier, pick_quote
from moodmatch.core.recommendation import RecommendationMapper, TasteSignal

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)


def parse_pairs(pairs):
    """
    Convierte ["HAPPY=85", "sad=5"] en {"HAPPY": 85.0, "sad": 5.0}.

    Raises:
        ValueError: Si algún par no tiene la forma etiqueta=número
    """
    emotions = {}
    for pair in pairs:
        label, sep, value = pair.partition('=')
        if not sep or not label.strip():
            raise ValueError(f"Par inválido '{pair}', se esperaba etiqueta=valor")
        try:
            emotions[label.strip()] = float(value)
        except ValueError:
            raise ValueError(f"Valor no numérico en '{pair}'")
    return emotions


def print_result(mood, params, quote):
    print(f"\n{'='*70}")
    print(f"Mood:        {mood.primary}" + (f"  +  {mood.secondary}" if mood.secondary else ""))
    print(f"Complejidad: {mood.complexity.value}")
    print(f"Confianza:   {mood.confidence:.3f}" + ("  (fallback)" if mood.is_fallback else ""))
    print(f"Cita:        {quote}")
    print(f"{'='*70}")
    print(f"  Categoría:   {params.category.value}"
          + (f" / {params.secondary_category.value}" if params.secondary_category else ""))
    print(f"  Estrategia:  {params.strategy.value}")
    print(f"  Géneros:     {', '.join(params.genre_seeds)}")
    print("  Audio features:")
    for name, feature in params.audio_features.items():
        print(f"    {name:<13} {feature.min:>7.2f} - {feature.max:<7.2f} (objetivo {feature.target:.2f})")
    print(f"  Razonamiento: {params.reasoning}")


def main():
    parser = argparse.ArgumentParser(description='Clasificar un vector emocional en un mood')
    parser.add_argument('emotions', nargs='*', help='Pares etiqueta=confianza (0-100)')
    parser.add_argument('--simulate', action='store_true', help='Usar un vector simulado')
    parser.add_argument('--seed', type=int, default=None, help='Semilla del simulador y de la cita')
    parser.add_argument('--dominant', default=None, help='Emoción dominante del vector simulado')
    parser.add_argument('--catalog', default=None, help='CSV de perfiles (por defecto el incluido)')
    parser.add_argument('--genres', default='', help='Géneros preferidos separados por comas')
    parser.add_argument('--artist', action='append', default=[], help='Artista favorito (repetible)')
    parser.add_argument('--json', action='store_true', help='Imprimir el resultado como JSON')
    parser.add_argument('--verbose', action='store_true', help='Mostrar el score de cada perfil')

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger('moodmatch').setLevel(logging.DEBUG)

    if args.simulate:
        raw = simulate_emotions(seed=args.seed, dominant=args.dominant)
        logger.info(f"Vector simulado: {raw}")
    elif args.emotions:
        try:
            raw = parse_pairs(args.emotions)
        except ValueError as e:
            logger.error(str(e))
            return 2
    else:
        parser.error("indica pares etiqueta=valor o --simulate")

    vector = normalize_emotions(raw)
    logger.info(f"Vector normalizado: {vector.to_dict()}")

    provider = CatalogProvider(args.catalog)
    classifier = MoodClassifier(provider)
    mood = classifier.classify(vector)

    taste = TasteSignal(
        preferred_genres=tuple(g.strip() for g in args.genres.split(',') if g.strip()),
        preferred_artists=tuple(args.artist),
    )
    params = RecommendationMapper().map(mood, None if taste.is_empty else taste)
    quote = pick_quote(mood.profile, args.seed)

    if args.json:
        print(json.dumps({
            'mood': mood.to_dict(),
            'quote': quote,
            'recommendation': params.to_dict(),
        }, indent=2, ensure_ascii=False))
    else:
        print_result(mood, params, quote)

    return 0


if __name__ == '__main__':
    sys.exit(main())
