"""
Unit tests for the cli_ocr helpers.
"""
import argparse
import json

import pytest
from cli_ocr import models_cli, parse_region, to_jsonable, write_output
from config.settings import Settings
from core.exceptions import ConfigurationError
from core.models import Region


class TestParseRegion:
    """Tests for parse_region argument type."""

    def test_valid(self):
        assert parse_region("10,20,30.5,40") == Region(10, 20, 30.5, 40)

    @pytest.mark.parametrize("value", ["1,2,3", "a,b,c,d", ""])
    def test_invalid(self, value):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_region(value)


class TestOutput:
    """Tests for JSON output helpers."""

    def test_error_entries_made_serializable(self):
        batch_entry = to_jsonable({'error': 'boom', 'image': b'12345'})
        region_entry = to_jsonable({'error': 'boom', 'region': Region(1, 2, 3, 4)})

        assert batch_entry == {'error': 'boom', 'image': '<5 bytes>'}
        assert region_entry['region'] == {'x': 1, 'y': 2, 'width': 3, 'height': 4}

    def test_write_output_to_file(self, temp_dir, capsys):
        path = temp_dir / "out.json"

        write_output(["plain text", {'error': 'x', 'image': 'a.png'}], str(path))

        assert json.loads(path.read_text(encoding='utf-8')) == [
            "plain text",
            {'error': 'x', 'image': 'a.png'}
        ]
        assert "Output written to" in capsys.readouterr().out


class TestModelsCommand:
    """Tests for the models subcommand."""

    def test_lists_models_without_creating_a_client(self, capsys, monkeypatch):
        def explode(*args, **kwargs):
            raise AssertionError("no service should be built")

        monkeypatch.setattr("cli_ocr.OCRService", explode)
        args = argparse.Namespace(provider='ollama', model='llava:13b', api_key=None, debug=False)

        models_cli(args)

        out = capsys.readouterr().out
        assert "Models for ollama:" in out
        assert " * llava:13b" in out
        assert "   bakllava" in out

    def test_invalid_config_still_rejected(self, monkeypatch):
        monkeypatch.setattr("cli_ocr.settings", Settings(_env_file=None, openai_api_key=None))
        args = argparse.Namespace(provider='openai', model=None, api_key=None, debug=False)

        with pytest.raises(ConfigurationError):
            models_cli(args)
