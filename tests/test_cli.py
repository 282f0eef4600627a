"""Tests for the command line interface."""

import argparse
import json
import os

import pytest

from video_brain.cli.main import main, parse_image_arg
from video_brain.models import ImageKind


@pytest.fixture
def no_config(tmp_path):
    """Path to a config file that does not exist, so defaults apply."""
    return str(tmp_path / "missing.yaml")


class TestParseImageArg:
    """Tests for --image parsing."""

    def test_with_description(self):
        """Test id, kind and a description containing colons."""
        image = parse_image_arg("app:screenshot:Dashboard: weekly view")
        assert image.id == "app"
        assert image.kind == ImageKind.SCREENSHOT
        assert image.description == "Dashboard: weekly view"

    def test_without_description(self):
        """Test the description is optional and kinds ignore case."""
        image = parse_image_arg("logo:LOGO")
        assert image.kind == ImageKind.LOGO
        assert image.description is None

    @pytest.mark.parametrize("value", ["logo", ":logo", "logo:banner"])
    def test_invalid(self, value):
        """Test malformed values are argument errors."""
        with pytest.raises(argparse.ArgumentTypeError):
            parse_image_arg(value)


class TestCommands:
    """Tests for CLI commands."""

    def test_no_command(self, capsys):
        """Test running without a command prints help."""
        assert main([]) == 0
        assert "generate" in capsys.readouterr().out

    def test_styles(self, capsys):
        """Test styles lists both profiles."""
        assert main(["styles"]) == 0
        out = capsys.readouterr().out
        assert "  premium_saas" in out
        assert "  social_short" in out
        assert "Base rhythm: 30 frames/beat" in out

    def test_palettes(self, capsys):
        """Test palettes lists every preset."""
        assert main(["palettes"]) == 0
        out = capsys.readouterr().out
        for name in ("premium_dark", "premium_light", "social_vibrant", "tech_minimal", "warm_trust"):
            assert name in out

    def test_generate_to_stdout(self, capsys, no_config):
        """Test generate prints the render payload as JSON."""
        code = main(["--config", no_config, "generate", "LinkedIn ad for our SaaS", "--mock"])
        assert code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["style"] == "premium_saas"
        assert len(payload["scenes"]) == 5

    def test_generate_forced_style(self, capsys, no_config):
        """Test --style overrides detection."""
        main(["--config", no_config, "generate", "LinkedIn ad", "--mock", "--style", "social_short"])
        assert json.loads(capsys.readouterr().out)["style"] == "social_short"

    def test_generate_to_file(self, capsys, tmp_path, no_config):
        """Test -o writes the payload and prints a summary."""
        output = tmp_path / "specs" / "video.json"
        code = main(["--config", no_config, "generate", "LinkedIn ad", "--mock", "-o", str(output)])

        assert code == 0
        assert len(json.loads(output.read_text())["scenes"]) == 5
        out = capsys.readouterr().out
        assert "Scenes: 5" in out
        assert f"Saved to {output}" in out

    def test_generate_stream(self, capsys, no_config):
        """Test --stream prints NDJSON ending in the result."""
        code = main(["--config", no_config, "generate", "LinkedIn ad", "--mock", "--stream"])

        assert code == 0
        events = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        assert {e["type"] for e in events[:-1]} == {"progress"}
        assert events[-1]["type"] == "result"

    def test_generate_unknown_provider(self, capsys, tmp_path):
        """Test an unknown provider exits with an error."""
        config = tmp_path / "config.yaml"
        config.write_text("llm:\n  provider: nope\n")
        assert main(["--config", str(config), "generate", "LinkedIn ad"]) == 1
        assert "Unknown LLM provider" in capsys.readouterr().err


class TestDotenv:
    """Tests for .env loading in the console entry point."""

    def test_main_loads_dotenv(self, capsys, tmp_path, monkeypatch):
        """Test main() reads a .env from the working directory."""
        (tmp_path / ".env").write_text("VIDEO_BRAIN_DOTENV_CHECK=loaded\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("VIDEO_BRAIN_DOTENV_CHECK", "placeholder")
        monkeypatch.delenv("VIDEO_BRAIN_DOTENV_CHECK")

        assert main(["styles"]) == 0
        assert os.environ["VIDEO_BRAIN_DOTENV_CHECK"] == "loaded"

    def test_existing_environment_wins(self, capsys, tmp_path, monkeypatch):
        """Test values already in the environment are not overridden."""
        (tmp_path / ".env").write_text("VIDEO_BRAIN_DOTENV_CHECK=loaded\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("VIDEO_BRAIN_DOTENV_CHECK", "from-shell")

        assert main(["styles"]) == 0
        assert os.environ["VIDEO_BRAIN_DOTENV_CHECK"] == "from-shell"
