"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from animal_memory.config import Config, load_config


class TestLoadConfig:
    """Tests for load_config function."""

    def test_defaults(self):
        """Test loading without a file."""
        config = load_config(None)
        assert config.game.num_pairs == 8
        assert config.timing.mismatch_delay == 1.0
        assert config.leaderboard.backend == "file"
        assert not config.logging.round_log.enabled

    def test_missing_file(self, tmp_path):
        """Test that a missing file gives defaults."""
        config = load_config(tmp_path / "nope.yaml")
        assert config == Config()

    def test_empty_file(self, tmp_path):
        """Test that an empty file gives defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == Config()

    def test_partial_file(self, tmp_path):
        """Test overriding some values."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "game:\n"
            "  num_pairs: 4\n"
            "  seed: 9\n"
            "leaderboard:\n"
            "  backend: supabase\n"
            "  url: https://x.supabase.co\n"
            "logging:\n"
            "  round_log:\n"
            "    enabled: true\n"
        )

        config = load_config(path)

        assert config.game.num_pairs == 4
        assert config.game.seed == 9
        assert config.leaderboard.backend == "supabase"
        assert config.leaderboard.table == "leaderboard"
        assert config.logging.round_log.enabled
        assert config.timing.mismatch_delay == 1.0

    @pytest.mark.parametrize(
        "body",
        [
            "timing:\n  mismatch_delay: 0\n",
            "game:\n  num_pairs: 0\n",
            "scoring:\n  move_weight: 0\n",
            "leaderboard:\n  backend: ftp\n",
        ],
    )
    def test_invalid_values(self, tmp_path, body):
        """Test that out-of-range settings are rejected."""
        path = tmp_path / "bad.yaml"
        path.write_text(body)
        with pytest.raises(ValidationError):
            load_config(path)
