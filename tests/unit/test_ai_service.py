import asyncio
from unittest.mock import MagicMock, patch

from app.services.ai_service import detect_emotions, parse_detected_emotions


class TestParseDetectedEmotions:

    def test_fenced_json_array(self):
        raw = '```json\n[{"emotion": "Joy", "confidence": 0.8}, {"emotion": "fear", "confidence": 0.3}]\n```'
        tags = parse_detected_emotions(raw)

        assert [(t.emotion, t.confidence, t.color) for t in tags] == [
            ("joy", 0.8, "#FFD700"),
            ("fear", 0.3, "#8A2BE2"),
        ]

    def test_object_wrapper(self):
        tags = parse_detected_emotions('{"emotions": [{"emotion": "sadness", "confidence": 1}]}')
        assert [t.emotion for t in tags] == ["sadness"]

    def test_untrusted_values_are_sanitized(self):
        raw = """[
            {"emotion": "joy", "confidence": 1.7},
            {"emotion": "nostalgia", "confidence": "high"},
            {"emotion": "", "confidence": 0.9},
            "anger"
        ]"""
        tags = parse_detected_emotions(raw)

        assert [(t.emotion, t.confidence, t.color) for t in tags] == [
            ("joy", 1.0, "#FFD700"),
            ("nostalgia", 0.0, "#808080"),
        ]

    def test_keeps_the_three_most_confident(self):
        raw = """[
            {"emotion": "joy", "confidence": 0.1},
            {"emotion": "love", "confidence": 0.9},
            {"emotion": "fear", "confidence": 0.5},
            {"emotion": "anger", "confidence": 0.7}
        ]"""
        assert [t.emotion for t in parse_detected_emotions(raw)] == ["love", "anger", "fear"]


class TestDetectEmotions:

    def test_nothing_to_analyze(self):
        assert asyncio.run(detect_emotions("   ")) == []

    def test_model_answer_is_parsed(self):
        response = MagicMock()
        response.text = '[{"emotion": "love", "confidence": 0.6}]'
        with patch("app.services.ai_service.model_json") as model:
            model.generate_content.return_value = response
            tags = asyncio.run(detect_emotions("Dinner with my family"))

        assert [t.emotion for t in tags] == ["love"]
        prompt = model.generate_content.call_args[0][0][0]
        assert "Dinner with my family" in prompt

    def test_model_failure_degrades_to_no_detection(self):
        with patch("app.services.ai_service.model_json") as model:
            model.generate_content.side_effect = RuntimeError("quota exceeded")
            assert asyncio.run(detect_emotions("Long day")) == []
