"""Provides functions for loading and accessing configuration settings.

Supports loading from a YAML file (stylepruner.yaml), a .env file and
environment variables prefixed with STYLEPRUNER_.
"""

import logging
import os
import re
import shlex
from pathlib import Path
from typing import Any, Dict, List, Optional, Pattern

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_FILE = Path("stylepruner.yaml")
ENV_FILE_NAME = ".env"
ENV_PREFIX = "STYLEPRUNER_"

DEFAULT_UNCSS_COMMAND = "uncss"
DEFAULT_IGNORE_SHEETS = ["https://cdnjs.cloudflare.com/ajax/libs/KaTeX/0.6.0/katex.min.css"]
DEFAULT_FILE_PATTERN = "**/*.html"
# Single capture, multiline, greedy: the contract with the generator's inline style output
DEFAULT_EXTRACTION_PATTERN = r"<style>(.*)</style>"

# --- Global Configuration Store ---
_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}
_overrides: Dict[str, Any] = {}  # Set from CLI flags
_loaded = False


def load_configuration(config_file: Optional[Path] = None, env_file: Optional[Path] = None, reload: bool = False) -> None:
    """Loads configuration from environment, .env file, and YAML file.

    Priority order (highest to lowest):
    1. Environment Variables
    2. .env file
    3. YAML configuration file
    4. Default values passed to the getters

    Args:
        config_file: Path to the YAML configuration file. Defaults to
            stylepruner.yaml in the current directory.
        env_file: Path to the .env file (searches upwards from cwd if None).
        reload: Discard previously loaded values and read again.
    """
    global _config, _loaded
    if _loaded and not reload:
        logger.debug("Configuration already loaded.")
        return

    _config = {}
    config_file = Path(config_file) if config_file else DEFAULT_CONFIG_FILE

    # 1. Load from YAML file (Lowest priority)
    if config_file.is_file():
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                yaml_config = yaml.safe_load(f)
            if isinstance(yaml_config, dict):
                _config.update(yaml_config)
                logger.info(f"Loaded configuration from YAML: {config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {config_file} did not contain a mapping.")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load or parse YAML config {config_file}: {e}")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    # 2. Load from .env file (Medium priority)
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        # override=False: real environment variables take precedence
        if load_dotenv(dotenv_path=dotenv_path, override=False):
            logger.info(f"Loaded environment variables from: {dotenv_path}")
    else:
        logger.debug("No .env file found at or above the current directory.")

    # 3. Environment Variables (Highest priority) are handled in get_config

    _loaded = True
    logger.debug("Configuration loading process completed.")


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None


def env_var_name(key: str) -> str:
    """Maps a dotted config key to its environment variable, e.g. uncss.timeout -> STYLEPRUNER_UNCSS_TIMEOUT."""
    return ENV_PREFIX + key.upper().replace('.', '_')


def _coerce(value: str) -> Any:
    # Try to convert common types
    if value.lower() == 'true':
        return True
    if value.lower() == 'false':
        return False
    try:
        if '.' in value:
            return float(value)
        return int(value)
    except (ValueError, TypeError):
        return value


def _lookup(key: str) -> Any:
    """Finds a key in the YAML data, as a flat dotted key or a nested path."""
    if key in _config:
        return _config[key]
    node: Any = _config
    for part in key.split('.'):
        if not isinstance(node, dict) or part not in node:
            raise KeyError(key)
        node = node[part]
    return node


def get_config(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by key.

    Priority:
    1. Test configuration
    2. Values set with set_config (CLI flags)
    3. Environment variable (STYLEPRUNER_<KEY>)
    4. YAML config
    5. Default value

    Args:
        key: The dotted configuration key, e.g. 'uncss.command'
        default: Default value if the key is not found

    Returns:
        The configuration value
    """
    if key in _test_config:
        return _test_config[key]
    if key in _overrides:
        return _overrides[key]

    env_key = env_var_name(key)
    if env_key in os.environ:
        return _coerce(os.environ[env_key])

    load_configuration()
    try:
        return _lookup(key)
    except KeyError:
        logger.debug(f"Config key '{key}' not found. Returning default: {default}")
        return default


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(',') if item.strip()]
    return [str(item) for item in value]


# --- Convenience Functions ---

def get_uncss_command() -> List[str]:
    """Program and leading arguments used to run uncss."""
    command = get_config('uncss.command', DEFAULT_UNCSS_COMMAND)
    if isinstance(command, str):
        return shlex.split(command)
    return [str(part) for part in command]


def get_ignore_sheets() -> List[str]:
    return _as_list(get_config('uncss.ignore_sheets', DEFAULT_IGNORE_SHEETS))


def get_uncss_timeout() -> Optional[float]:
    timeout = get_config('uncss.timeout')
    if timeout in (None, '', 0):
        return None
    return float(timeout)


def get_uncss_options() -> Dict[str, Any]:
    """Extra uncssrc options (ignore, media, ...) merged into every analysis."""
    options = get_config('uncss.options', {})
    if not isinstance(options, dict):
        logger.warning(f"Ignoring uncss.options, expected a mapping but got {type(options).__name__}")
        return {}
    return dict(options)


def get_file_pattern() -> str:
    return str(get_config('rewrite.file_pattern', DEFAULT_FILE_PATTERN))


def get_extraction_pattern() -> Pattern[str]:
    return re.compile(str(get_config('rewrite.extraction_pattern', DEFAULT_EXTRACTION_PATTERN)), re.DOTALL)


def get_strict_exit_status() -> bool:
    return bool(get_config('rewrite.strict_exit_status', False))


def get_concurrency() -> int:
    concurrency = int(get_config('rewrite.concurrency', 1))
    if concurrency < 1:
        logger.warning(f"rewrite.concurrency must be at least 1, got {concurrency}. Using 1.")
        return 1
    return concurrency


def set_config(key: str, value: Any) -> None:
    """Overrides a configuration value for the rest of the process.

    Args:
        key: Configuration key (e.g., 'rewrite.concurrency')
        value: Value to set
    """
    logger.debug(f"Setting config: {key} = {value}, type: {type(value)}")
    _overrides[key] = value


def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """
    Set configuration values for testing purposes.
    These values will override any existing configuration.

    Args:
        config_dict: Dictionary of configuration values to set
    """
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration: {config_dict}")


def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()
    _overrides.clear()
    logger.debug("Cleared testing configuration")
