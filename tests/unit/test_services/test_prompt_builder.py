"""
Unit tests for services.prompt_builder module.
"""
import pytest
from core.exceptions import InvalidInputError
from services.prompt_builder import build_prompt, PromptBuilder


class TestBuildPrompt:
    """Tests for build_prompt function."""

    def test_json_with_colors(self):
        prompt = build_prompt("json", include_colors=True)

        assert "COLOR ANALYSIS" in prompt
        assert '"rawText"' in prompt
        assert '"elements"' in prompt
        assert '"averageConfidence"' in prompt
        assert '"imageInfo"' in prompt
        assert "Return ONLY a valid JSON object" in prompt

    def test_text_without_colors(self):
        prompt = build_prompt("text", include_colors=False)

        assert "COLOR ANALYSIS" not in prompt
        assert '"elements"' not in prompt
        assert "raw extracted text" in prompt

    def test_json_without_colors(self):
        prompt = build_prompt("json", include_colors=False)

        assert "COLOR ANALYSIS" not in prompt
        assert '"backgroundColor"' in prompt

    def test_coordinate_system_described(self):
        prompt = build_prompt("json")

        assert "top-left" in prompt
        assert "X increases going right" in prompt
        assert "Y increases going down" in prompt

    def test_deterministic(self):
        assert build_prompt("json", include_colors=True) == build_prompt("json", include_colors=True)

    def test_unknown_format_rejected(self):
        with pytest.raises(InvalidInputError):
            build_prompt("xml")


class TestPromptBuilder:
    """Tests for PromptBuilder wrapper."""

    def test_build_matches_function(self):
        builder = PromptBuilder()

        assert builder.build("text", include_colors=True) == build_prompt("text", include_colors=True)
