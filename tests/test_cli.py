"""Tests for the CLI interface."""

import json
from pathlib import Path

from typer.testing import CliRunner

from attributed_markup.cli import app, build_base_font, describe_font
from attributed_markup.formatting.ir import FontDescriptor


runner = CliRunner()


class TestHelpers:
    """Tests for CLI helper functions."""

    def test_build_base_font_default(self):
        assert build_base_font(None, None) == FontDescriptor(size=17.0)

    def test_build_base_font_options(self):
        assert build_base_font(12.0, "Georgia") == FontDescriptor(
            size=12.0, family="Georgia"
        )

    def test_describe_font(self):
        font = FontDescriptor(size=12.0, bold=True, italic=True)
        assert describe_font(font) == "system 12pt bold italic"
        assert describe_font(None) == ""


class TestCLI:
    """Tests for CLI commands."""

    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "Attributed Markup" in result.stdout

    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "parse" in result.stdout
        assert "serialize" in result.stdout

    def test_missing_file_error(self, tmp_path: Path):
        result = runner.invoke(app, ["parse", str(tmp_path / "nonexistent.html")])
        assert result.exit_code != 0

    def test_parse_table(self, tmp_markup_file: Path):
        result = runner.invoke(app, ["parse", str(tmp_markup_file)])

        assert result.exit_code == 0
        assert "'Hello'" in result.stdout
        assert "#FF0000" in result.stdout

    def test_parse_json(self, tmp_markup_file: Path):
        result = runner.invoke(
            app, ["parse", str(tmp_markup_file), "--json", "--base-size", "12"]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        texts = [run["text"] for run in data["runs"]]
        assert texts == ["Hello", " ", "world"]
        first = data["runs"][0]["attributes"]
        assert first["font"]["bold"] is True
        assert first["base_font"]["size"] == 12.0
        assert first["paragraph"]["alignment"] == "center"

    def test_parse_resolves_images(self, image_dir: Path):
        markup = image_dir / "pic.html"
        markup.write_text('<img src="dot"/>', encoding="utf-8")

        result = runner.invoke(app, ["parse", str(markup), "--json"])

        assert result.exit_code == 0
        run = json.loads(result.stdout)["runs"][0]
        assert run["object"] == "dot"
        assert run["width"] == 12.0

    def test_serialize(self, tmp_path: Path):
        dump = tmp_path / "runs.json"
        dump.write_text(json.dumps({
            "runs": [
                {"text": "Hi", "attributes": {"font": {"size": 10.0, "bold": True}}},
                {"text": " there"},
            ]
        }), encoding="utf-8")

        result = runner.invoke(app, ["serialize", str(dump), "--base-size", "10"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "<b>Hi</b> there"

    def test_parse_then_serialize(self, tmp_markup_file: Path, tmp_path: Path):
        """Test that a JSON dump from parse serializes back to markup."""
        parsed = runner.invoke(app, ["parse", str(tmp_markup_file), "--json"])
        dump = tmp_path / "runs.json"
        dump.write_text(parsed.stdout, encoding="utf-8")

        result = runner.invoke(app, ["serialize", str(dump)])

        assert result.exit_code == 0
        assert result.stdout.strip() == (
            '<b>Hello</b> <font color="#FF0000">world</font>'
        )

    def test_serialize_invalid_dump(self, tmp_path: Path):
        dump = tmp_path / "runs.json"
        dump.write_text("not json", encoding="utf-8")

        result = runner.invoke(app, ["serialize", str(dump)])

        assert result.exit_code == 1
        assert "Invalid run dump" in result.stdout
