"""
CLI utility functions.

Pure, stateless utility functions used across CLI commands.
"""

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from sqlcanvas.generator import GeneratorConfig


def parse_values(values_string: str | None, option_name: str = "--values") -> dict[str, Any]:
    """
    Parse a JSON object of column values.

    Args:
        values_string: JSON object mapping column names to values (None for empty)
        option_name: Option name used in error messages

    Returns:
        Dictionary of column values

    Raises:
        ValueError: If the string is not a JSON object
    """
    if not values_string:
        return {}

    try:
        values = json.loads(values_string)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid {option_name} format (must be valid JSON): {e}") from e

    if not isinstance(values, dict):
        raise ValueError(f"{option_name} must be a JSON object mapping column names to values")
    return values


def load_generator_config(config_path: str | None) -> GeneratorConfig:
    """
    Load generator configuration from the [generator] table of a TOML file.

    Args:
        config_path: Path to the TOML file, or None for defaults

    Returns:
        GeneratorConfig built from the file (defaults if no path)
    """
    if not config_path:
        return GeneratorConfig()

    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, "rb") as f:
        config = tomllib.load(f)

    return GeneratorConfig.from_dict(config.get("generator", {}))


def setup_logging(verbose: bool = False) -> None:
    """
    Set up logging configuration.

    Args:
        verbose: If True, set logging level to DEBUG, otherwise INFO
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s - %(name)s - %(message)s")
