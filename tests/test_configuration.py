"""Tests for settings, payload loading and the command line."""

import sys
import os
import json

import pytest
import yaml
from pydantic import ValidationError

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from celigo_connector.config import CeligoSettings, ConfigLoader, LoggingSettings, get_settings, reset_settings
from celigo_connector.exceptions import ConfigurationError
from celigo_connector.main import main, validate_payload

from payloads import connection, export


@pytest.fixture
def clean_settings(monkeypatch):
    """Fresh settings for each test, without ambient CELIGO_/LOG_ variables."""
    for key in list(os.environ):
        if key.startswith(("CELIGO_", "LOG_")):
            monkeypatch.delenv(key, raising=False)
    reset_settings()
    yield monkeypatch
    reset_settings()


class TestSettings:
    """Environment-driven settings."""

    def test_defaults(self, clean_settings):
        settings = CeligoSettings()

        assert settings.api_base == "https://api.integrator.io/v1"
        assert settings.timeout_seconds > 0

    def test_env_overrides(self, clean_settings):
        clean_settings.setenv("CELIGO_TOKEN", "env-token")
        clean_settings.setenv("CELIGO_API_BASE", "https://api.eu.integrator.io/v1/")
        clean_settings.setenv("CELIGO_TIMEOUT_SECONDS", "12.5")

        settings = get_settings()

        assert settings.celigo.token == "env-token"
        assert settings.celigo.api_base == "https://api.eu.integrator.io/v1"
        assert settings.celigo.timeout_seconds == 12.5

    def test_settings_are_cached(self, clean_settings):
        assert get_settings() is get_settings()

    def test_non_positive_timeout(self, clean_settings):
        clean_settings.setenv("CELIGO_TIMEOUT_SECONDS", "0")

        with pytest.raises(ValidationError):
            CeligoSettings()

    def test_log_level_normalized(self, clean_settings):
        clean_settings.setenv("LOG_LEVEL", "debug")

        assert LoggingSettings().level == "DEBUG"

    def test_invalid_log_level(self, clean_settings):
        clean_settings.setenv("LOG_LEVEL", "verbose")

        with pytest.raises(ValidationError):
            LoggingSettings()


class TestConfigLoader:
    """Payload files in JSON and YAML."""

    def setup_method(self):
        self.loader = ConfigLoader()

    def test_load_json(self, tmp_path):
        path = tmp_path / "connection.json"
        path.write_text(json.dumps(connection("ftp")))

        assert self.loader.load_payload(path) == connection("ftp")

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "export.yml"
        path.write_text(yaml.safe_dump(export("RDBMSExport")))

        assert self.loader.load_payload(path)["rdbms"]["query"] == "SELECT id, email FROM customers"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            self.loader.load_payload(tmp_path / "absent.json")

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "connection.toml"
        path.write_text("name = 'x'")

        with pytest.raises(ConfigurationError, match="Unsupported"):
            self.loader.load_payload(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("name: [unclosed")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            self.loader.load_payload(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{'name': 1}")

        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            self.loader.load_payload(path)

    def test_top_level_must_be_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigurationError, match="must be an object"):
            self.loader.load_payload(path)

    def test_save_and_reload_yaml(self, tmp_path):
        path = tmp_path / "out" / "netsuite.yaml"

        self.loader.save_payload(connection("netsuite"), path, format="yaml")

        assert self.loader.load_payload(path) == connection("netsuite")


class TestCommandLine:
    """The validate and schema commands work offline."""

    def test_validate_payload_success(self):
        response = validate_payload("export", export("HTTPExport"))

        assert response.success is True
        assert response.get("asynchronous") is True

    def test_validate_payload_as_update(self):
        response = validate_payload("connection", connection("http"), current_type="ftp")

        assert response.success is False
        assert response.errors[0].field == "type"

    def test_validate_command(self, tmp_path, capsys, clean_settings):
        path = tmp_path / "connection.json"
        path.write_text(json.dumps(connection("netsuite")))

        exit_code = main(["validate", "connection", str(path)])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out)["success"] is True

    def test_validate_command_reports_errors(self, tmp_path, capsys, clean_settings):
        path = tmp_path / "export.yaml"
        path.write_text(yaml.safe_dump(export("NetSuiteExport", oneToMany=True)))

        exit_code = main(["validate", "export", str(path)])

        assert exit_code == 1
        assert json.loads(capsys.readouterr().out)["errors"][0]["field"] == "pathToMany"

    def test_missing_file_exit_code(self, tmp_path, clean_settings):
        assert main(["validate", "integration", str(tmp_path / "absent.json")]) == 2

    def test_schema_command(self, capsys, clean_settings):
        exit_code = main(["schema", "create_connection"])

        output = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert len(output["schema"]["oneOf"]) == 4
