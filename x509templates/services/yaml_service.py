"""YAML file operations service."""

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger("x509templates")


class YAMLService:
    """Service for YAML file operations."""

    @staticmethod
    def load_yaml(file_path: Path) -> Dict[str, Any]:
        """
        Load YAML file and return as dictionary.

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed YAML content as dictionary

        Raises:
            FileNotFoundError: If file doesn't exist
            yaml.YAMLError: If file is not valid YAML
        """
        if not file_path.exists():
            raise FileNotFoundError(f"YAML file not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
                logger.debug(f"Loaded YAML from: {file_path}")
                return data or {}
            except yaml.YAMLError as e:
                logger.error(f"Error parsing YAML file {file_path}: {e}")
                raise

    @staticmethod
    def loads(text: str) -> Dict[str, Any]:
        """
        Parse YAML text.

        Raises:
            yaml.YAMLError: If text is not valid YAML
        """
        return yaml.safe_load(text) or {}

    @staticmethod
    def dumps(data: Dict[str, Any]) -> str:
        """Serialize plain data (no custom objects) to YAML text."""
        return yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)

    @staticmethod
    def save_yaml(file_path: Path, data: Dict[str, Any]) -> None:
        """
        Save dictionary to YAML file.

        Args:
            file_path: Path to save YAML file
            data: Data to save

        Raises:
            yaml.YAMLError: If data cannot be serialized to YAML
        """
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, "w", encoding="utf-8") as f:
            try:
                f.write(YAMLService.dumps(data))
                logger.debug(f"Saved YAML to: {file_path}")
            except yaml.YAMLError as e:
                logger.error(f"Error saving YAML file {file_path}: {e}")
                raise
