"""Tests del clasificador de moods."""

import pytest

from moodmatch.core.emotion import EmotionVector, normalize_emotions
from moodmatch.core.mood import (
    CatalogProvider,
    Complexity,
    EMOTION_DRIFT_LABEL,
    MoodClassifier,
    MoodProfile,
    NEUTRAL_BALANCE_LABEL,
    classify_emotions,
)


def _stub_scorer(scores):
    """Scorer que devuelve un score fijo por label."""

    def scorer(emotions, profile, settings):
        return scores[profile.label]

    return scorer


def _classifier(profiles, scores=None):
    provider = CatalogProvider.preloaded(profiles)
    if scores is None:
        return MoodClassifier(provider)
    return MoodClassifier(provider, scorer=_stub_scorer(scores))


PRIMARY = MoodProfile(label="Primary", emotion_triggers=("happy",))
RUNNER_UP = MoodProfile(label="Runner Up", emotion_triggers=("sad",))


class TestAcceptanceThreshold:

    def test_score_exactly_at_threshold_is_accepted(self):
        profile = MoodProfile(label="Edge", emotion_triggers=("surprised",), percent_conditions={"happy": 50})

        mood = _classifier([profile]).classify({"happy": 60})

        assert mood.confidence == 0.3
        assert mood.primary == "Edge"
        assert not mood.is_fallback

    def test_single_present_trigger_is_accepted(self):
        mood = _classifier([PRIMARY]).classify({"happy": 20})

        assert mood.primary == "Primary"
        assert mood.confidence == pytest.approx(0.3)

    def test_score_just_below_threshold_falls_back(self):
        profile = MoodProfile(label="Edge", emotion_triggers=("surprised",), percent_conditions={"happy": 50})

        mood = _classifier([profile]).classify({"happy": 59.98})

        assert mood.primary == EMOTION_DRIFT_LABEL
        assert mood.is_fallback

    def test_stub_score_below_threshold_falls_back(self):
        mood = _classifier([PRIMARY], {"Primary": 0.2999999}).classify({"happy": 80})

        assert mood.is_fallback


class TestComplexBand:

    def test_runner_up_inside_band_makes_complex_mood(self):
        classifier = _classifier([PRIMARY, RUNNER_UP], {"Primary": 0.8, "Runner Up": 0.56})

        mood = classifier.classify({"happy": 80, "sad": 40})

        assert mood.complexity == Complexity.COMPLEX
        assert mood.primary == "Primary"
        assert mood.secondary == "Runner Up"
        assert mood.secondary_profile == RUNNER_UP
        assert mood.confidence == 0.8

    def test_runner_up_outside_band_keeps_mood_simple(self):
        classifier = _classifier([PRIMARY, RUNNER_UP], {"Primary": 0.8, "Runner Up": 0.55})

        mood = classifier.classify({"happy": 80, "sad": 40})

        assert mood.complexity == Complexity.SIMPLE
        assert mood.secondary is None
        assert mood.secondary_profile is None

    def test_best_profile_wins_regardless_of_catalog_position(self):
        classifier = _classifier([RUNNER_UP, PRIMARY], {"Primary": 0.9, "Runner Up": 0.1})

        assert classifier.classify({"happy": 80}).primary == "Primary"

    def test_ties_are_broken_by_catalog_order(self):
        classifier = _classifier([RUNNER_UP, PRIMARY], {"Primary": 0.6, "Runner Up": 0.6})

        mood = classifier.classify({"happy": 80})

        assert mood.primary == "Runner Up"
        assert mood.secondary == "Primary"

    def test_single_profile_catalog_is_simple(self):
        mood = _classifier([PRIMARY], {"Primary": 0.9}).classify({"happy": 80})

        assert mood.complexity == Complexity.SIMPLE


class TestFallback:

    def test_empty_vector_yields_neutral_balance(self, provider):
        mood = MoodClassifier(provider).classify({})

        assert mood.primary == NEUTRAL_BALANCE_LABEL
        assert mood.confidence == 0.0
        assert mood.is_fallback
        assert mood.complexity == Complexity.SIMPLE

    def test_all_noise_vector_yields_neutral_balance(self, provider):
        mood = MoodClassifier(provider).classify({"happy": 0.4, "sad": 0.9})

        assert mood.primary == NEUTRAL_BALANCE_LABEL
        assert len(mood.raw_emotions) == 0

    def test_no_profile_meets_threshold_yields_emotion_drift(self, provider):
        mood = MoodClassifier(provider).classify({"confused": 62, "calm": 20})

        assert mood.primary == EMOTION_DRIFT_LABEL
        assert mood.profile.emotion_triggers == ("confused",)
        assert mood.profile.percent_conditions["confused"] == pytest.approx(62 * 0.8)
        assert mood.confidence == pytest.approx(0.62)

    def test_empty_catalog_falls_back(self):
        mood = _classifier([]).classify({"fear": 70})

        assert mood.primary == EMOTION_DRIFT_LABEL
        assert mood.profile.emotion_triggers == ("fear",)

    def test_fallback_confidence_is_clamped(self):
        mood = _classifier([]).classify({"surprised": 140})

        assert mood.confidence == 1.0

    def test_inert_profile_is_never_selected(self):
        mood = _classifier([MoodProfile(label="Blank")]).classify({"happy": 90})

        assert mood.primary == EMOTION_DRIFT_LABEL

    def test_missing_catalog_file_still_classifies(self, tmp_path):
        classifier = MoodClassifier(CatalogProvider(tmp_path / "nope.csv"))

        assert classifier.classify({"sad": 50}).primary == EMOTION_DRIFT_LABEL


def test_end_to_end_pure_joy(pure_joy, deep_blue):
    classifier = _classifier([deep_blue, pure_joy])

    mood = classifier.classify({"happy": 85, "sad": 5, "excited": 40})

    assert mood.primary == "Pure Joy"
    assert mood.complexity == Complexity.SIMPLE
    assert 0.3 <= mood.confidence <= 1.0
    assert mood.confidence == pytest.approx(0.475)


def test_bundled_catalog_example(bundled_provider):
    mood = MoodClassifier(bundled_provider).classify({"HAPPY": 85.0, "SAD": 5.0, "SURPRISED": 40.0})

    assert mood.primary == "Pure Joy"
    assert mood.complexity == Complexity.SIMPLE
    assert mood.confidence == pytest.approx(0.475)


def test_classification_is_deterministic(bundled_provider):
    classifier = MoodClassifier(bundled_provider)
    vector = normalize_emotions({"happy": 55, "calm": 48, "sad": 12})

    first = classifier.classify(vector)
    second = classifier.classify(vector)

    assert first == second
    assert (first.primary, first.secondary, first.confidence, first.complexity) == \
        (second.primary, second.secondary, second.confidence, second.complexity)


def test_raw_and_normalized_inputs_classify_the_same(provider):
    classifier = MoodClassifier(provider)
    raw = {"HAPPY ": 85, "EmotionName.Excited": 40, "sad": 0.2}

    assert classifier.classify(raw) == classifier.classify(normalize_emotions(raw))


def test_classify_emotions_shortcut(provider):
    mood = classify_emotions({"sad": 75}, provider=provider)

    assert mood.primary == "Deep Blue"
    assert mood.to_dict()["complexity"] == "simple"
    assert mood.to_dict()["raw_emotions"] == {"sad": 75.0}


def test_hand_built_vector_is_normalized_before_scoring(provider):
    vector = EmotionVector({"HAPPY": 85, "Excited": 40, "sad": 0.5})

    mood = MoodClassifier(provider).classify(vector)

    assert mood.primary == "Pure Joy"
    assert dict(mood.raw_emotions) == {"happy": 85.0, "excited": 40.0}
