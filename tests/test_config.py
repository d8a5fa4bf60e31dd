"""Tests for configuration loading."""

import tempfile
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from zplimage.config import ConversionOptions, Settings, load_config


class TestLoadConfig:
    """Tests for load_config function."""

    def test_missing_file_uses_defaults(self):
        options = load_config(Path("/nonexistent/zplimage.yaml"))
        assert options == ConversionOptions()
        assert options.use_compression is True
        assert options.threshold == 128

    def test_load_values(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "zplimage.yaml"
            with open(config_path, "w") as f:
                yaml.dump({"use_compression": False, "origin_x": 10, "width": 200, "invert": True}, f)

            options = load_config(config_path)

            assert options.use_compression is False
            assert options.origin_x == 10
            assert options.origin_y == 0
            assert options.width == 200
            assert options.invert is True

    def test_empty_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "zplimage.yaml"
            config_path.write_text("")
            assert load_config(config_path) == ConversionOptions()

    def test_invalid_value(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "zplimage.yaml"
            config_path.write_text("threshold: 300\n")
            with pytest.raises(ValidationError):
                load_config(config_path)


class TestConversionOptions:
    def test_negative_origin_rejected(self):
        with pytest.raises(ValidationError):
            ConversionOptions(origin_x=-1)

    def test_zero_width_rejected(self):
        with pytest.raises(ValidationError):
            ConversionOptions(width=0)


class TestSettings:
    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("ZPLIMAGE_DEBUG", "true")
        monkeypatch.setenv("ZPLIMAGE_CONFIG_FILE", "/etc/zplimage.yaml")

        settings = Settings()

        assert settings.debug is True
        assert settings.config_file == Path("/etc/zplimage.yaml")
