"""
Configuration system for QuickWrap

Provides configuration management with support for files and environment variables.
Includes validation, default value handling, and configuration merging.
"""

import os
import json
import yaml
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Any
import logging

from .errors import QuickWrapError
from .identifiers import is_identifier

logger = logging.getLogger(__name__)


class ConfigurationError(QuickWrapError):
    """Raised when configuration validation fails."""

    pass


class ConfigurationManager:
    """Manages configuration loading, validation, and merging."""

    DEFAULT_CONFIG_PATHS = [
        "quickwrap.json",
        "quickwrap.yaml",
        "quickwrap.yml",
        ".quickwrap.json",
        ".quickwrap.yaml",
        ".quickwrap.yml",
        os.path.expanduser("~/.quickwrap.json"),
        os.path.expanduser("~/.quickwrap.yaml"),
    ]

    @staticmethod
    def find_config_file(search_paths: Optional[List[str]] = None) -> Optional[str]:
        """Find the first existing configuration file."""
        paths = search_paths or ConfigurationManager.DEFAULT_CONFIG_PATHS

        for path in paths:
            if os.path.exists(path):
                return path
        return None

    @staticmethod
    def load_config_file(config_path: str) -> Dict[str, Any]:
        """Load configuration from file (JSON or YAML)."""
        if not os.path.exists(config_path):
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                if config_path.endswith((".yaml", ".yml")):
                    return yaml.safe_load(f) or {}
                else:
                    return json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Invalid configuration file format: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Error reading configuration file: {e}") from e

    @staticmethod
    def load_env_config() -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config = {}

        naming = {}
        if os.getenv("QUICKWRAP_INTERFACE_PREFIX") is not None:
            naming["interface_prefix"] = os.getenv("QUICKWRAP_INTERFACE_PREFIX")

        if os.getenv("QUICKWRAP_CLASS_SUFFIX") is not None:
            naming["class_suffix"] = os.getenv("QUICKWRAP_CLASS_SUFFIX")

        if naming:
            config["naming"] = naming

        rendering = {}
        if os.getenv("QUICKWRAP_INDENT_SIZE"):
            try:
                rendering["indent_size"] = int(os.getenv("QUICKWRAP_INDENT_SIZE"))
            except ValueError:
                logger.warning("Invalid QUICKWRAP_INDENT_SIZE value, using default")

        if rendering:
            config["rendering"] = rendering

        output = {}
        if os.getenv("QUICKWRAP_OUTPUT_NAMESPACE"):
            output["namespace"] = os.getenv("QUICKWRAP_OUTPUT_NAMESPACE")

        if os.getenv("QUICKWRAP_OUTPUT_DIRECTORY"):
            output["directory"] = os.getenv("QUICKWRAP_OUTPUT_DIRECTORY")

        if os.getenv("QUICKWRAP_OVERWRITE"):
            output["overwrite"] = os.getenv("QUICKWRAP_OVERWRITE").lower() == "true"

        if output:
            config["output"] = output

        return config

    @staticmethod
    def merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge multiple configuration dictionaries, with later ones taking precedence."""
        result = {}

        for config in configs:
            if not config:
                continue

            for key, value in config.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = ConfigurationManager.merge_configs(result[key], value)
                else:
                    result[key] = value

        return result

    @staticmethod
    def validate_config(config_data: Dict[str, Any]) -> None:
        """Validate configuration data."""
        if "naming" in config_data:
            naming = config_data["naming"]

            # Affixes are glued to a type name, so they must keep it an identifier
            prefix = naming.get("interface_prefix", "I")
            if not isinstance(prefix, str) or not prefix or not is_identifier(prefix + "X"):
                raise ConfigurationError("interface_prefix must be non-empty identifier characters")

            suffix = naming.get("class_suffix", "Service")
            if not isinstance(suffix, str) or not suffix or not is_identifier("X" + suffix):
                raise ConfigurationError("class_suffix must be non-empty identifier characters")

        if "rendering" in config_data:
            rendering = config_data["rendering"]

            if "indent_size" in rendering:
                indent_size = rendering["indent_size"]
                if not isinstance(indent_size, int) or not (1 <= indent_size <= 16):
                    raise ConfigurationError("indent_size must be between 1 and 16")

        if "keyword_overrides" in config_data:
            overrides = config_data["keyword_overrides"]
            if not isinstance(overrides, dict):
                raise ConfigurationError("keyword_overrides must be a mapping")
            for key, value in overrides.items():
                if not isinstance(key, str) or not isinstance(value, str) or not value:
                    raise ConfigurationError(
                        f"keyword_overrides.{key} must map a type name to a spelling"
                    )

        if "output" in config_data:
            output = config_data["output"]

            namespace = output.get("namespace")
            if namespace is not None and not all(
                is_identifier(part) for part in str(namespace).split(".")
            ):
                raise ConfigurationError(f"output.namespace is not a valid namespace: {namespace}")


@dataclass
class NamingConfig:
    """Affixes used to name the generated interface and class."""

    interface_prefix: str = "I"
    class_suffix: str = "Service"


@dataclass
class RenderingConfig:
    """Configuration for source rendering."""

    indent_size: int = 4
    newline: str = "\n"


@dataclass
class OutputConfig:
    """Configuration for generated output."""

    namespace: Optional[str] = None
    directory: str = "."
    overwrite: bool = False


@dataclass
class QuickWrapConfig:
    """Main configuration class for QuickWrap."""

    naming: NamingConfig = field(default_factory=NamingConfig)
    rendering: RenderingConfig = field(default_factory=RenderingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    # Runtime full name -> source spelling, layered over the built-in table
    keyword_overrides: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def default(cls) -> "QuickWrapConfig":
        """Create default configuration."""
        return cls()

    @classmethod
    def load(
        cls,
        config_path: Optional[str] = None,
        use_env: bool = True,
        validate: bool = True,
    ) -> "QuickWrapConfig":
        """
        Load configuration from multiple sources with precedence:
        1. Default values
        2. Configuration file
        3. Environment variables (if use_env=True)

        Args:
            config_path: Path to configuration file. If None, searches for default files.
            use_env: Whether to load environment variables
            validate: Whether to validate the configuration
        """
        configs_to_merge = []

        file_config = {}
        if config_path:
            file_config = ConfigurationManager.load_config_file(config_path)
        else:
            found_config = ConfigurationManager.find_config_file()
            if found_config:
                file_config = ConfigurationManager.load_config_file(found_config)
                logger.info(f"Loaded configuration from: {found_config}")

        configs_to_merge.append(file_config)

        if use_env:
            configs_to_merge.append(ConfigurationManager.load_env_config())

        merged_config = ConfigurationManager.merge_configs(*configs_to_merge)

        if validate:
            ConfigurationManager.validate_config(merged_config)

        return cls.from_dict(merged_config)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuickWrapConfig":
        config = cls()
        sections = {
            "naming": config.naming,
            "rendering": config.rendering,
            "output": config.output,
        }
        for section_name, section in sections.items():
            for key, value in (data.get(section_name) or {}).items():
                if hasattr(section, key):
                    setattr(section, key, value)
                else:
                    logger.warning(f"Unknown configuration key ignored: {section_name}.{key}")

        config.keyword_overrides = dict(data.get("keyword_overrides") or {})
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    def to_file(self, config_path: str, format: str = "json") -> None:
        """
        Save configuration to file.

        Args:
            config_path: Path to save configuration
            format: File format ('json' or 'yaml')
        """
        config_data = self.to_dict()

        try:
            with open(config_path, "w", encoding="utf-8") as f:
                if format.lower() == "yaml":
                    yaml.dump(config_data, f, default_flow_style=False, indent=2, sort_keys=False)
                else:
                    json.dump(config_data, f, indent=2)
        except OSError as e:
            raise ConfigurationError(f"Error saving configuration file: {e}") from e

    def get_config_summary(self) -> str:
        """Get a human-readable summary of the configuration."""
        return f"""QuickWrap Configuration Summary:
Naming:
  - Interface name: {self.naming.interface_prefix}<Type>{self.naming.class_suffix}
  - Class name: <Type>{self.naming.class_suffix}

Rendering:
  - Indent size: {self.rendering.indent_size}
  - Keyword overrides: {len(self.keyword_overrides)}

Output:
  - Namespace: {self.output.namespace or "(derived from wrapped type)"}
  - Directory: {self.output.directory}
  - Overwrite: {self.output.overwrite}
"""
