"""Fixtures compartidas de la suite de tests."""

import csv

import pytest

from moodmatch.app import create_app
from moodmatch.core.mood import CatalogProvider, MoodProfile
from moodmatch.core.mood.profile import OPTIONAL_COLUMNS, REQUIRED_COLUMNS

CSV_HEADER = list(REQUIRED_COLUMNS + OPTIONAL_COLUMNS)


@pytest.fixture
def write_catalog(tmp_path):
    """Escribe un CSV de perfiles en tmp_path y retorna su ruta."""

    def _write(rows, header=None, name="catalog.csv"):
        path = tmp_path / name
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(header or CSV_HEADER)
            writer.writerows(rows)
        return path

    return _write


@pytest.fixture
def pure_joy():
    return MoodProfile(
        label="Pure Joy",
        description="Unfiltered happiness",
        emotion_triggers=("excited",),
        percent_conditions={"happy": 70},
        pattern_type="Uplifted",
        quotes=("Joy is the simplest form of gratitude.",),
        music_tags=("pop", "upbeat", "indie pop", "feel-good"),
    )


@pytest.fixture
def deep_blue():
    return MoodProfile(
        label="Deep Blue",
        description="A heavy, settled sadness",
        emotion_triggers=("sad",),
        percent_conditions={"sad": 60},
        pattern_type="Melancholic Peace",
    )


@pytest.fixture
def provider(pure_joy, deep_blue):
    return CatalogProvider.preloaded([pure_joy, deep_blue])


@pytest.fixture
def bundled_provider():
    return CatalogProvider()


@pytest.fixture
def app():
    return create_app({'TESTING': True})


@pytest.fixture
def client(app):
    return app.test_client()
