"""Loader for candidate payload files in JSON or YAML."""

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ..exceptions import ConfigurationError
from ..utils.logging import get_logger, log_execution_time


YAML_SUFFIXES = ('.yaml', '.yml')


class ConfigLoader:
    """Reads and writes raw payloads; validation is left to the schemas."""

    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)

    @log_execution_time
    def load_payload(self, file_path: Union[str, Path]) -> Dict[str, Any]:
        """Load a payload from a JSON or YAML file.

        Args:
            file_path: Path to the payload file

        Returns:
            Parsed payload as a dictionary

        Raises:
            ConfigurationError: If the file is missing, unreadable or not an object
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise ConfigurationError(f"Payload file not found: {file_path}")

        suffix = file_path.suffix.lower()
        if suffix not in YAML_SUFFIXES and suffix != '.json':
            raise ConfigurationError(f"Unsupported file format: {file_path.suffix}")

        self.logger.info("Loading payload from file", file_path=str(file_path))

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                if suffix in YAML_SUFFIXES:
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML format: {e}")
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON format: {e}")
        except OSError as e:
            raise ConfigurationError(f"Failed to read payload file: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Payload must be an object, got {type(data).__name__}: {file_path}"
            )

        return data

    def save_payload(self, payload: Dict[str, Any], file_path: Union[str, Path], format: str = "json") -> None:
        """Write a payload to disk.

        Args:
            payload: Payload to write
            file_path: Output file path
            format: "json" or "yaml"
        """
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                if format.lower() in ('yaml', 'yml'):
                    yaml.dump(payload, f, default_flow_style=False, indent=2, sort_keys=False)
                elif format.lower() == 'json':
                    json.dump(payload, f, indent=2)
                else:
                    raise ConfigurationError(f"Unsupported format: {format}")
        except OSError as e:
            raise ConfigurationError(f"Failed to save payload: {e}")

        self.logger.info("Payload saved", file_path=str(file_path), format=format)
