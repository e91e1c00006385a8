from itertools import permutations

import pytest

from app.analytics.colors import (
    blend, emotion_color, emotion_label, hex_to_rgb, rgb_string
)


class TestHexParsing:

    def test_with_and_without_hash(self):
        assert hex_to_rgb("#FFD700") == (255, 215, 0)
        assert hex_to_rgb("ffd700") == (255, 215, 0)

    @pytest.mark.parametrize("bad", ["", "#FFF", "#GG0000", "rgb(1,2,3)", None, 42])
    def test_malformed_colors_are_rejected(self, bad):
        assert hex_to_rgb(bad) is None

    def test_rgb_formatting(self):
        assert rgb_string((1, 2, 3)) == "rgb(1, 2, 3)"


class TestBlend:

    @pytest.mark.parametrize("weight", [0.01, 0.5, 1, 7.25])
    def test_single_entry_is_returned_unchanged(self, weight):
        assert blend([("#FFD700", weight)]) == (255, 215, 0)

    def test_weighted_average(self):
        # r = 255*3/4 = 191.25, b = 255/4 = 63.75
        assert blend([("#FF0000", 3), ("#0000FF", 1)]) == (191, 0, 64)

    def test_rounds_half_up(self):
        assert blend([("#000000", 1), ("#010101", 1)]) == (1, 1, 1)

    def test_order_does_not_matter(self):
        entries = [("#FFD700", 1.0), ("#4169E1", 1.0), ("#DC143C", 1.0), ("#32CD32", 1.0)]
        results = {blend(list(p)) for p in permutations(entries)}
        assert len(results) == 1

    def test_order_does_not_matter_with_float_weights(self):
        entries = [("#FFD700", 0.1), ("#4169E1", 0.7), ("#DC143C", 0.2), ("#8A2BE2", 0.3)]
        results = {blend(list(p)) for p in permutations(entries)}
        assert len(results) == 1

    def test_empty_input_has_no_color(self):
        assert blend([]) is None

    def test_zero_total_weight_has_no_color(self):
        assert blend([("#FFD700", 0), ("#4169E1", 0.0)]) is None

    def test_invalid_entries_are_skipped(self):
        result = blend([("not-a-color", 1.0), ("#4169E1", 0.8), ("#FF0000", -1.0)])
        assert result == (65, 105, 225)

    def test_only_invalid_entries_has_no_color(self):
        assert blend([("nope", 1.0), ("#12", 1.0)]) is None

    def test_zero_weight_entry_does_not_shift_color(self):
        assert blend([("#FFD700", 0.9), ("#000000", 0)]) == (255, 215, 0)


class TestEmotionPalette:

    def test_known_emotion(self):
        assert emotion_color("sadness") == "#4169E1"
        assert emotion_label("joy") == "Joy"

    def test_unknown_emotion_falls_back_to_neutral(self):
        assert emotion_color("nostalgia") == "#808080"
        assert emotion_label("nostalgia") == "nostalgia"
