# ==============================================
# Tests for the command line entry point
# ==============================================

import json
import os
from unittest.mock import patch

import pytest

from patternbridge.cli import build_parser, main


@pytest.fixture
def breed_file(tmp_path):
    path = tmp_path / "breeds.tsv"
    path.write_text("breed\nLabrador\nLabrador\nPoodle\nBoxer\n", encoding="utf-8")
    return path


@pytest.fixture
def page_file(tmp_path, native_markup):
    path = tmp_path / "page.html"
    path.write_text(native_markup, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clean_env():
    with patch.dict(os.environ, {}, clear=True):
        yield


class TestParser:
    """Argument parsing."""

    def test_markup_and_url_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["learn", "--markup", "a.html", "--url", "https://x.test"])

    def test_repeatable_data(self):
        args = build_parser().parse_args(["learn", "--data", "a.tsv", "--data", "b.tsv"])
        assert args.data == ["a.tsv", "b.tsv"]

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestLearnCommand:
    """patternbridge learn"""

    def test_writes_json_output(self, breed_file, page_file, tmp_path, capsys):
        output = tmp_path / "result.json"
        code = main(["learn", "--data", str(breed_file), "--markup", str(page_file),
                     "--output", str(output)])

        assert code == 0
        result = json.loads(output.read_text(encoding="utf-8"))
        assert result["status"] == "complete"
        assert result["test_cases"][0]["id"] == "filter_breed_1"
        assert "Learning result: complete" in capsys.readouterr().out

    def test_json_to_stdout(self, breed_file, page_file, capsys):
        main(["learn", "--data", str(breed_file), "--markup", str(page_file), "--json"])
        out = capsys.readouterr().out
        payload = json.loads(out[out.index("{"):])
        assert payload["summary"]["connections"] == 4

    def test_nothing_usable(self, tmp_path):
        assert main(["learn", "--markup", str(tmp_path / "missing.html")]) == 1


class TestClassifyCommands:
    """patternbridge classify-data / classify-ui"""

    def test_classify_data(self, breed_file, capsys):
        assert main(["classify-data", "--data", str(breed_file)]) == 0
        out = capsys.readouterr().out
        assert '"categorical"' in out
        assert '"Labrador"' in out
        payload = json.loads(out[out.index("{"):])
        assert payload["profiles"][0]["name"] == "breed"
        assert payload["profiles"][0]["record_count"] == 4

    def test_classify_data_missing_file(self, tmp_path):
        assert main(["classify-data", "--data", str(tmp_path / "missing.tsv")]) == 1

    def test_classify_ui(self, page_file, capsys):
        assert main(["classify-ui", "--markup", str(page_file)]) == 0
        assert "#breed-filter" in capsys.readouterr().out

    def test_classify_ui_missing_file(self, tmp_path):
        assert main(["classify-ui", "--markup", str(tmp_path / "missing.html")]) == 1
