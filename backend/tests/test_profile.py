"""Tests del modelo MoodProfile y del parseo de filas del catálogo."""

import pytest

from moodmatch.core.mood import MalformedRowError, MoodProfile, parse_profile_row, pick_quote
from moodmatch.core.mood.profile import (
    DEFAULT_QUOTE,
    DEFAULT_SUGGESTION,
    PATTERN_MUSIC_TAGS,
    parse_percent_conditions,
    parse_quotes,
)


def _row(**overrides):
    row = {
        "label": "Quiet Storm",
        "description": "Anger held under a calm surface",
        "emotion_triggers": "Angry, Calm",
        "percent_conditions": "Angry > 30%",
        "pattern_type": "Subtle Tension",
        "quotes": "['Calm is a superpower.']",
        "music_tags": "",
        "suggestion_note": "",
    }
    row.update(overrides)
    return row


class TestPercentConditions:

    def test_parses_common_forms(self):
        conditions = parse_percent_conditions("Sad > 21%, Calm >= 15, Happy>70.5%")

        assert conditions == {"sad": 21.0, "calm": 15.0, "happy": 70.5}

    def test_highest_threshold_wins_for_repeated_emotion(self):
        assert parse_percent_conditions("Sad > 21%, sad > 30%, SAD > 10%") == {"sad": 30.0}

    def test_empty_text_means_no_conditions(self):
        assert parse_percent_conditions("") == {}
        assert parse_percent_conditions(None) == {}

    @pytest.mark.parametrize("text", ["Sad < 20%", "Sad > lots", "> 20%", "Sad 20%"])
    def test_malformed_condition_raises(self, text):
        with pytest.raises(MalformedRowError):
            parse_percent_conditions(text)


class TestQuotes:

    def test_bracketed_list(self):
        assert parse_quotes("['One, with comma', 'Two']") == ["One, with comma", "Two"]

    def test_pipe_separated_text(self):
        assert parse_quotes("First | Second |") == ["First", "Second"]

    def test_empty_text(self):
        assert parse_quotes("  ") == []

    def test_apostrophes_inside_bracketed_list(self):
        assert parse_quotes("['Don't give up.', 'Keep going.']") == ["Don't give up.", "Keep going."]

    def test_unterminated_list_keeps_its_text(self):
        assert parse_quotes("['unterminated") == ["unterminated"]

    def test_non_string_list_does_not_raise(self):
        assert parse_quotes("[1, 2]") == ["1, 2"]

    def test_bracketed_list_with_only_separators(self):
        assert parse_quotes("['', '']") == []


class TestParseRow:

    def test_full_row(self):
        profile = parse_profile_row(_row())

        assert profile.label == "Quiet Storm"
        assert profile.emotion_triggers == ("angry", "calm")
        assert dict(profile.percent_conditions) == {"angry": 30.0}
        assert profile.quotes == ("Calm is a superpower.",)

    def test_music_tags_and_suggestion_derived_from_pattern(self):
        profile = parse_profile_row(_row())

        assert list(profile.music_tags) == PATTERN_MUSIC_TAGS["subtle tension"]
        assert "tension" in profile.suggestion_note

    def test_explicit_music_tags_and_suggestion_are_kept(self):
        profile = parse_profile_row(_row(music_tags="metal, punk", suggestion_note="Turn it up."))

        assert profile.music_tags == ("metal", "punk")
        assert profile.suggestion_note == "Turn it up."

    def test_unknown_pattern_uses_defaults(self):
        profile = parse_profile_row(_row(pattern_type="Intense"))

        assert profile.music_tags == ("chill", "versatile", "adaptive")
        assert profile.suggestion_note == DEFAULT_SUGGESTION

    def test_optional_columns_may_be_absent(self):
        row = _row()
        del row["music_tags"]
        del row["suggestion_note"]

        assert parse_profile_row(row).label == "Quiet Storm"

    def test_blank_label_raises(self):
        with pytest.raises(MalformedRowError):
            parse_profile_row(_row(label="   "))

    def test_missing_column_raises(self):
        row = _row()
        row["quotes"] = None

        with pytest.raises(MalformedRowError):
            parse_profile_row(row)

    def test_extra_columns_raise(self):
        row = _row()
        row[None] = ["unexpected"]

        with pytest.raises(MalformedRowError):
            parse_profile_row(row)


class TestMoodProfile:

    def test_defaults_guarantee_a_quote(self):
        profile = MoodProfile(label="Empty", quotes=())

        assert profile.quotes == (DEFAULT_QUOTE,)

    def test_triggers_are_cleaned_and_deduplicated(self):
        profile = MoodProfile(label="X", emotion_triggers=("Happy", " happy", "SAD", ""))

        assert profile.emotion_triggers == ("happy", "sad")

    def test_inert_profile(self):
        assert MoodProfile(label="Blank").is_inert
        assert not MoodProfile(label="X", emotion_triggers=("sad",)).is_inert

    def test_conditions_are_read_only(self, pure_joy):
        with pytest.raises(TypeError):
            pure_joy.percent_conditions["sad"] = 10

    def test_dict_roundtrip(self, pure_joy):
        assert MoodProfile.from_dict(pure_joy.to_dict()) == pure_joy

    def test_pick_quote_is_reproducible_with_seed(self):
        profile = MoodProfile(label="X", quotes=("a", "b", "c", "d"))

        assert pick_quote(profile, seed=3) == pick_quote(profile, seed=3)
        assert pick_quote(profile, seed=3) in profile.quotes
