"""
Smoke tests for configuration loading and validation.
"""

import pytest

from main import load_config, validate_config


class TestValidateConfig:
    """Tests for validate_config function."""

    def test_valid_config_passes(self, valid_config):
        """A complete valid config passes validation."""
        is_valid, error = validate_config(valid_config)

        assert is_valid is True
        assert error is None

    @pytest.mark.parametrize("section", ["tracking", "counting", "log_path", "log_level"])
    def test_missing_section(self, valid_config, section):
        """Each required section is reported when missing."""
        del valid_config[section]

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert section in error.lower()

    def test_empty_tracking_section_allowed(self, valid_config):
        """Empty tracking section falls back to defaults."""
        valid_config["tracking"] = None

        is_valid, error = validate_config(valid_config)

        assert is_valid is True

    def test_negative_max_disappeared(self, valid_config):
        valid_config["tracking"]["max_disappeared"] = -1

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "max_disappeared" in error

    def test_zero_max_disappeared_valid(self, valid_config):
        """Zero means evict on the first missed frame."""
        valid_config["tracking"]["max_disappeared"] = 0

        is_valid, _ = validate_config(valid_config)

        assert is_valid is True

    def test_float_max_disappeared_invalid(self, valid_config):
        valid_config["tracking"]["max_disappeared"] = 2.5

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "max_disappeared" in error

    def test_non_positive_max_distance(self, valid_config):
        valid_config["tracking"]["max_distance"] = 0

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "max_distance" in error

    def test_line_as_points_valid(self, valid_config):
        valid_config["counting"]["line"] = [[0.1, 0.0], [0.1, 1.0]]

        is_valid, _ = validate_config(valid_config)

        assert is_valid is True

    @pytest.mark.parametrize("line", ["middle", [[0.1, 0.0]], [[0.1, 0.0], [0.1]], True])
    def test_invalid_line(self, valid_config, line):
        valid_config["counting"]["line"] = line

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "counting.line" in error

    def test_negative_cooldown(self, valid_config):
        valid_config["counting"]["cooldown_ms"] = -5

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "cooldown_ms" in error

    def test_fractional_cooldown_invalid(self, valid_config):
        """Cooldown is whole milliseconds."""
        valid_config["counting"]["cooldown_ms"] = 0.9

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "cooldown_ms" in error

    def test_lowercase_log_level_valid(self, valid_config):
        """Log level names are case-insensitive, as setup_logging accepts them."""
        valid_config["log_level"] = "debug"

        is_valid, error = validate_config(valid_config)

        assert is_valid is True
        assert error is None

    def test_invalid_log_level(self, valid_config):
        valid_config["log_level"] = "VERBOSE"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "log_level" in error


class TestLoadConfig:
    """Tests for load_config function."""

    def test_loads_default_yaml(self, temp_config_dir):
        """Config loads from default.yaml when only it exists."""
        config_path = str(temp_config_dir / "config.yaml")

        config = load_config(config_path)

        assert config["tracking"]["max_disappeared"] == 30
        assert config["counting"]["line"] == 0.5
        assert config["log_level"] == "INFO"

    def test_local_overrides_merge(self, temp_config_dir):
        """Local config.yaml overrides default.yaml."""
        config_yaml = temp_config_dir / "config.yaml"
        config_yaml.write_text("""
tracking:
  max_distance: 40.0
""")

        config = load_config(str(config_yaml))

        assert config["tracking"]["max_distance"] == 40.0
        assert config["tracking"]["max_disappeared"] == 30

    def test_explicit_config_applied_last(self, temp_config_dir):
        """An explicit config path overrides both default.yaml and config.yaml."""
        (temp_config_dir / "config.yaml").write_text("""
counting:
  cooldown_ms: 500
""")
        explicit = temp_config_dir / "site.yaml"
        explicit.write_text("""
counting:
  line: [[0.0, 0.5], [1.0, 0.5]]
""")

        config = load_config(str(explicit))

        assert config["counting"]["line"] == [[0.0, 0.5], [1.0, 0.5]]
        assert config["counting"]["cooldown_ms"] == 500

    def test_invalid_yaml_exits(self, temp_config_dir):
        config_yaml = temp_config_dir / "config.yaml"
        config_yaml.write_text("tracking: [unclosed\n")

        with pytest.raises(SystemExit):
            load_config(str(config_yaml))
