import logging

import pydantic
import pytest

from cyclus import SystemMap, using
from cyclus.config.loaders import load_file
from cyclus.config.settings import SystemSettings
from cyclus.config.setup import setup_logging
from cyclus.errors import UsageError


class TestSystemSettings:
    """Tests for SystemSettings."""

    def test_defaults(self):
        """Test default values."""
        settings = SystemSettings()

        assert settings.name == "system"
        assert settings.log_level == "WARNING"
        assert settings.emit_events is True

    def test_reads_environment(self, monkeypatch):
        """Test CYCLUS_ variables are applied."""
        monkeypatch.setenv("CYCLUS_NAME", "billing")
        monkeypatch.setenv("CYCLUS_LOG_LEVEL", "debug")
        monkeypatch.setenv("CYCLUS_EMIT_EVENTS", "false")

        settings = SystemSettings()

        assert settings.name == "billing"
        assert settings.log_level == "DEBUG"
        assert settings.level == logging.DEBUG
        assert settings.emit_events is False

    def test_numeric_level(self):
        """Test numeric levels are normalised to names."""
        assert SystemSettings(log_level=logging.INFO).log_level == "INFO"

    def test_invalid_level(self):
        """Test unknown level names are rejected."""
        with pytest.raises(pydantic.ValidationError):
            SystemSettings(log_level="chatty")

    def test_configure(self):
        """Test configure sets up the cyclus logger."""
        logger = SystemSettings(log_level="ERROR").configure()

        assert logger.name == "cyclus"
        assert logger.level == logging.ERROR

    def test_system_logger_uses_name(self):
        """Test a system logs under its configured name."""
        system = SystemMap({}, settings=SystemSettings(name="billing"))

        assert system.container.provided_logger().name == "cyclus.system.billing"
        assert system.settings.name == "billing"


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_default(self):
        """Test setup_logging with default parameters."""
        logger = setup_logging()

        assert logger.name == "cyclus"
        assert logger.level == logging.INFO

    def test_setup_logging_with_level(self):
        """Test setup_logging with specific level."""
        logger = setup_logging(name="cyclus.level_test", level=logging.DEBUG)

        assert logger.level == logging.DEBUG

    def test_setup_logging_handler_has_formatter(self):
        """Test setup_logging creates a formatted StreamHandler."""
        logger = setup_logging(name="cyclus.formatter_test")

        stream_handlers = [h for h in logger.handlers if isinstance(h, logging.StreamHandler)]
        assert len(stream_handlers) == 1
        assert stream_handlers[0].formatter is not None

    def test_setup_logging_does_not_duplicate_handlers(self):
        """Test setup_logging doesn't add duplicate handlers."""
        logger1 = setup_logging(name="cyclus.no_dup_test")
        logger2 = setup_logging(name="cyclus.no_dup_test", level=logging.WARNING)

        assert len(logger1.handlers) == len(logger2.handlers) == 1
        assert logger2.handlers[0].level == logging.WARNING


class TestLoadFile:
    """Tests for load_file."""

    def test_yaml(self, sample_yaml_config):
        """Test YAML files are parsed."""
        data = load_file(sample_yaml_config)

        assert data["database"]["pool_size"] == 5
        assert data["scheduler"] == {"tick": 10}

    def test_json(self, sample_json_config):
        """Test JSON files are parsed."""
        assert load_file(str(sample_json_config)) == {"a": 1, "b": 2}

    def test_empty(self, empty_config_file):
        """Test an empty file yields an empty dict."""
        assert load_file(empty_config_file) == {}

    def test_missing(self, temp_dir):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_file(temp_dir / "missing.yaml")

    def test_directory(self, temp_dir):
        """Test a directory raises IsADirectoryError."""
        with pytest.raises(IsADirectoryError):
            load_file(temp_dir)

    def test_unsupported(self, temp_dir):
        """Test unsupported suffixes raise UsageError."""
        path = temp_dir / "config.toml"
        path.write_text("a = 1")

        with pytest.raises(UsageError):
            load_file(path)

    @pytest.mark.asyncio
    async def test_as_data_component(self, sample_yaml_config, recorder):
        """Test loaded data can be injected as a component."""
        system = SystemMap({
            "config": load_file(sample_yaml_config),
            "database": using(recorder("Database"), ["config"]),
        })

        await system.start()

        assert system["database"].config["database"]["url"] == "postgres://localhost/app"
