"""
Configuration Manager for the bonus plan engine
Location: bonusplan/config/config_manager.py
"""

import os
import yaml
import logging
from typing import Any, Dict


class ConfigManager:
    def __init__(self, config_path: str):
        """
        Initialize ConfigManager with the path to the configuration file.

        Args:
            config_path: Path to YAML configuration file
        """
        self.config_path = config_path
        self.config = {}
        self.logger = logging.getLogger(__name__)

        self._load_config()

    def _load_config(self) -> None:
        """
        Load configuration from YAML file.
        """
        self.logger.info(f"Loading configuration from: {self.config_path}")

        if not os.path.exists(self.config_path):
            self.logger.error(f"Configuration file not found: {self.config_path}")
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, 'r') as config_file:
                self.config = yaml.safe_load(config_file) or {}
        except yaml.YAMLError as e:
            self.logger.exception(f"Error parsing configuration: {str(e)}")
            raise

        if not isinstance(self.config, dict):
            raise ValueError(f"Configuration root must be a mapping: {self.config_path}")

        if self.config:
            section_keys = list(self.config.keys())
            self.logger.info(f"Configuration loaded successfully with sections: {section_keys}")
        else:
            self.logger.warning("Configuration file is empty")

    def get(self, section: str, key: str = None, default: Any = None) -> Any:
        """
        Get configuration value by section and key.

        Args:
            section: Configuration section
            key: Configuration key (optional)
            default: Default value if key is not found

        Returns:
            Configuration value or default
        """
        if key is None:
            return self.config.get(section, default)

        section_data = self.config.get(section) or {}
        if not isinstance(section_data, dict):
            self.logger.warning(f"Configuration section [{section}] is not a mapping")
            return default
        return section_data.get(key, default)

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get entire configuration section.

        Returns:
            Dictionary containing section data or empty dict if not found
        """
        return self.config.get(section) or {}

    def get_all(self) -> Dict[str, Any]:
        return self.config
