"""Tests del mapper de recomendación."""

import itertools
import json

import pytest

from moodmatch.core.emotion import normalize_emotions
from moodmatch.core.mood import ClassifiedMood, Complexity, MoodClassifier, MoodProfile
from moodmatch.core.recommendation import (
    AUDIO_FEATURE_TABLE,
    EventCandidate,
    FeatureRange,
    MoodCategory,
    RecommendationMapper,
    TasteSignal,
    blend_ranges,
    mood_genre_pool,
    resolve_category,
    select_genre_seeds,
)
from moodmatch.core.recommendation.tables import RecommendationStrategy


def _mood(profile, secondary_profile=None, confidence=0.6):
    return ClassifiedMood(
        primary=profile.label,
        confidence=confidence,
        complexity=Complexity.COMPLEX if secondary_profile else Complexity.SIMPLE,
        raw_emotions=normalize_emotions({"happy": 70}),
        profile=profile,
        secondary=secondary_profile.label if secondary_profile else None,
        secondary_profile=secondary_profile,
    )


class TestResolveCategory:

    def test_label_matching_a_category(self):
        assert resolve_category(MoodProfile(label="Excited")) == MoodCategory.EXCITED

    def test_pattern_type(self, pure_joy):
        assert resolve_category(pure_joy) == MoodCategory.HAPPY

    @pytest.mark.parametrize("emotion, expected", [
        ("disgusted", MoodCategory.ANGRY),
        ("fear", MoodCategory.ANXIOUS),
        ("confused", MoodCategory.ANXIOUS),
        ("surprised", MoodCategory.EXCITED),
        ("sad", MoodCategory.SAD),
    ])
    def test_first_trigger_emotion(self, emotion, expected):
        profile = MoodProfile(label="Mixed", emotion_triggers=(emotion, "happy"), pattern_type="Contrast Blend")

        assert resolve_category(profile) == expected

    def test_condition_emotion_when_no_trigger_is_known(self):
        profile = MoodProfile(label="X", emotion_triggers=("bored",), percent_conditions={"angry": 40})

        assert resolve_category(profile) == MoodCategory.ANGRY

    def test_defaults_to_calm(self):
        assert resolve_category(MoodProfile(label="Unknown")) == MoodCategory.CALM
        assert resolve_category(None) == MoodCategory.CALM


class TestGenreSeeds:

    def test_user_intersection_first_then_mood_order(self):
        seeds = select_genre_seeds(["Rock", "pop", "jazz"], ["pop", "dance", "disco", "rock"])

        assert seeds == ["rock", "pop", "dance", "disco"]

    def test_without_user_genres_uses_mood_order(self):
        assert select_genre_seeds(None, ["edm", "hip-hop", "trap"]) == ["edm", "hip-hop", "trap"]

    def test_cap_and_uniqueness_for_any_combination(self):
        user_lists = [[], ["pop"], ["POP", "pop", "Dance", "metal", "lofi", "edm", "trap"]]
        mood_lists = [
            [],
            ["pop", "dance", "disco"],
            ["pop", "Pop", "dance", "disco", "upbeat", "indie pop", "feel-good", "dance"],
        ]

        for user, mood in itertools.product(user_lists, mood_lists):
            seeds = select_genre_seeds(user, mood)
            assert len(seeds) <= 5
            assert len(seeds) == len(set(seeds))

    def test_pool_exhausted_before_cap(self):
        assert select_genre_seeds(["jazz"], ["pop"]) == ["pop"]

    def test_mood_pool_combines_category_genres_and_profile_tags(self, pure_joy):
        pool = mood_genre_pool(MoodCategory.HAPPY, pure_joy)

        assert pool[:3] == ["pop", "dance", "disco"]
        assert "indie pop" in pool
        assert pool.count("pop") == 1


def test_blend_ranges_weights_midpoints_and_widens_envelope():
    blended = blend_ranges(FeatureRange(0.6, 1.0, 0.8), FeatureRange(0.0, 0.4, 0.2))

    assert blended == FeatureRange(min=0.0, max=1.0, target=0.62)


class TestMap:

    def test_simple_mood_uses_category_table(self, pure_joy):
        params = RecommendationMapper().map(_mood(pure_joy))

        assert params.category == MoodCategory.HAPPY
        assert params.secondary_category is None
        assert params.audio_features == AUDIO_FEATURE_TABLE[MoodCategory.HAPPY]
        assert params.genre_seeds == ("pop", "dance", "disco", "upbeat", "indie pop")
        assert params.event_weights["festival"] == 1.0
        assert params.ranked_events == ()

    def test_complex_mood_blends_seventy_thirty(self, pure_joy, deep_blue):
        params = RecommendationMapper().map(_mood(pure_joy, deep_blue))

        valence = params.audio_features["valence"]
        assert params.secondary_category == MoodCategory.SAD
        assert valence.target == pytest.approx(0.7 * 0.8 + 0.3 * 0.175)
        assert valence.min == 0.0
        assert valence.max == 1.0
        assert params.event_weights["festival"] == pytest.approx(0.7 * 1.0 + 0.3 * 0.15)

    def test_blended_ranges_cover_both_moods(self, pure_joy, deep_blue):
        params = RecommendationMapper().map(_mood(pure_joy, deep_blue))

        for name, feature in params.audio_features.items():
            happy = AUDIO_FEATURE_TABLE[MoodCategory.HAPPY][name]
            sad = AUDIO_FEATURE_TABLE[MoodCategory.SAD][name]
            assert feature.min <= min(happy.min, sad.min)
            assert feature.max >= max(happy.max, sad.max)
            assert feature.contains(feature.target)

    def test_user_genres_come_first(self, pure_joy):
        taste = TasteSignal(preferred_genres=("Disco", "jazz"))

        params = RecommendationMapper().map(_mood(pure_joy), taste)

        assert params.genre_seeds[0] == "disco"
        assert "jazz" not in params.genre_seeds
        assert len(params.genre_seeds) == 5

    def test_events_are_ranked_with_mood_affinity(self, pure_joy):
        events = [
            EventCandidate(id="spa", category="wellness", distance=80, days_until=45),
            EventCandidate(id="fest", category="festival", distance=4, days_until=6),
            EventCandidate(id="club", category="club", distance=12, days_until=20),
        ]

        params = RecommendationMapper().map(_mood(pure_joy), events=events)

        assert [e.event.id for e in params.ranked_events] == ["fest", "club"]

    def test_invalid_blend_weight(self):
        with pytest.raises(ValueError):
            RecommendationMapper(blend_weight=1.5)

    def test_parameters_are_read_only(self, pure_joy):
        params = RecommendationMapper().map(_mood(pure_joy))

        with pytest.raises(TypeError):
            params.audio_features["valence"] = None
        with pytest.raises(TypeError):
            params.event_weights["festival"] = 0.0


class TestReasoning:

    def test_template_only_without_taste(self, deep_blue):
        params = RecommendationMapper().map(_mood(deep_blue))

        assert params.reasoning == "Sometimes we need music that understands our feelings."

    def test_genre_and_artist_clauses(self, pure_joy):
        taste = TasteSignal(preferred_genres=("indie",), preferred_artists=("Phoebe Bridgers",))

        reasoning = RecommendationMapper().map(_mood(pure_joy), taste).reasoning

        assert reasoning.startswith("You're feeling great!")
        assert "Since you love indie" in reasoning
        assert reasoning.endswith("Fans of Phoebe Bridgers often enjoy this style too.")

    def test_placeholder_artist_is_skipped(self, pure_joy):
        taste = TasteSignal(preferred_artists=("Various Artists",))

        reasoning = RecommendationMapper().map(_mood(pure_joy), taste).reasoning

        assert "Fans of" not in reasoning


@pytest.mark.parametrize("label, genres, expected", [
    ("Happy", ("pop",), RecommendationStrategy.MOOD_REINFORCEMENT),
    ("Sad", ("Melancholy",), RecommendationStrategy.CONTRAST_BOOST),
    ("Angry", ("metal",), RecommendationStrategy.PERSONAL_TASTE),
    ("Calm", ("classical",), RecommendationStrategy.PERFECT_MATCH),
    ("Happy", ("metal",), RecommendationStrategy.DISCOVERY),
    ("Excited", (), RecommendationStrategy.DISCOVERY),
])
def test_strategy(label, genres, expected):
    taste = TasteSignal(preferred_genres=genres)

    params = RecommendationMapper().map(_mood(MoodProfile(label=label)), taste)

    assert params.strategy == expected


def test_fallback_moods_map_to_categories(provider):
    classifier = MoodClassifier(provider)
    mapper = RecommendationMapper()

    drift = mapper.map(classifier.classify({"fear": 65}))
    neutral = mapper.map(classifier.classify({}))

    assert drift.category == MoodCategory.ANXIOUS
    assert neutral.category == MoodCategory.CALM


def test_mapping_is_idempotent(pure_joy, deep_blue):
    mood = _mood(pure_joy, deep_blue)
    taste = TasteSignal(preferred_genres=("pop", "acoustic"), preferred_artists=("Adele",))
    events = [EventCandidate(id="e1", category="concert", distance=8, days_until=3, genres=("pop",))]
    mapper = RecommendationMapper()

    first = mapper.map(mood, taste, events)
    second = mapper.map(mood, taste, events)

    assert first == second
    assert json.dumps(first.to_dict(), sort_keys=True) == json.dumps(second.to_dict(), sort_keys=True)


class TestTasteSignal:

    def test_from_dict_accepts_both_key_styles(self):
        camel = TasteSignal.from_dict({"preferredGenres": ["Pop"], "preferredArtists": ["Adele"]})
        snake = TasteSignal.from_dict({"preferred_genres": ["Pop"], "preferred_artists": ["Adele"]})

        assert camel == snake
        assert camel.preferred_genres == ("Pop",)

    def test_missing_signal_is_empty(self):
        assert TasteSignal.from_dict(None).is_empty
        assert TasteSignal.from_dict({}).is_empty

    @pytest.mark.parametrize("data", [
        ["pop"],
        {"preferredGenres": 5},
        {"preferred_genres": ["pop", 3]},
        {"eventInteractions": {"club": "many"}},
        {"event_interactions": {"club": -1}},
    ])
    def test_invalid_shapes_raise(self, data):
        with pytest.raises(ValueError):
            TasteSignal.from_dict(data)

    def test_interaction_keys_are_normalized(self):
        taste = TasteSignal(event_interactions={"Club": 2, "club ": 1, "FESTIVAL": 4})

        assert dict(taste.event_interactions) == {"club": 3.0, "festival": 4.0}
