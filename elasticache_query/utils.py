"""Utility functions for the ElastiCache query CLI."""

import fnmatch
import json
import logging
from pathlib import Path
from typing import Any, Dict, List


# Valid output formats
VALID_FORMATS = ["query", "json", "csv", "markdown"]


def match_wildcard(pattern: str, text: str) -> bool:
    """Match text against wildcard pattern.

    Args:
        pattern: Wildcard pattern (e.g., "describe_*")
        text: Text to match

    Returns:
        True if text matches pattern, False otherwise
    """
    return fnmatch.fnmatch(text, pattern)


def ensure_output_dir(path: str) -> str:
    """Ensure the parent directory of an output file exists.

    Args:
        path: Output file path

    Returns:
        Absolute path of the file
    """
    path_obj = Path(path)
    path_obj.parent.mkdir(parents=True, exist_ok=True)
    return str(path_obj.absolute())


def parse_param_value(raw: str) -> Any:
    """Parse a CLI parameter value.

    Lists, objects, quoted strings and the literals ``true``/``false`` are
    decoded as JSON. Everything else, numbers and ``null`` included, is kept
    as the raw string so identifiers such as "0001" or "1e3" reach the wire
    unchanged.

    Args:
        raw: Raw value (e.g., '["us-east-1a"]', "true", "cache.t3.medium")

    Returns:
        Parsed value

    Raises:
        ValueError: If a value that looks like JSON does not decode
    """
    text = raw.strip()
    if text in ("true", "false") or text[:1] in ("[", "{", '"'):
        try:
            return json.loads(text)
        except ValueError as e:
            raise ValueError(f"Invalid JSON value '{raw}': {e}")
    return raw


def parse_params(assignments: List[str]) -> Dict[str, Any]:
    """Parse repeated ``name=value`` parameters.

    Args:
        assignments: Raw assignments from the command line

    Returns:
        Mapping of parameter name to parsed value

    Raises:
        ValueError: If an assignment has no "=" or an empty name
    """
    params: Dict[str, Any] = {}
    for assignment in assignments:
        name, sep, raw = assignment.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"Invalid parameter '{assignment}'. Expected name=value")
        params[name.replace("-", "_")] = parse_param_value(raw)
    return params


def parse_output_format(format_str: str) -> str:
    """Validate an output format name.

    Args:
        format_str: Format name, case insensitive

    Returns:
        Lowercase format name

    Raises:
        ValueError: If the format is not supported
    """
    output_format = format_str.strip().lower()
    if output_format not in VALID_FORMATS:
        raise ValueError(
            f"Invalid output format '{format_str}'. "
            f"Valid formats: {', '.join(VALID_FORMATS)}"
        )
    return output_format


def setup_logger(verbose: bool = False) -> logging.Logger:
    """Setup logger with appropriate level.

    Args:
        verbose: Enable DEBUG level logging

    Returns:
        Configured logger
    """
    logger = logging.getLogger("elasticache_query")

    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # Console handler (stderr)
    handler = logging.StreamHandler()
    handler.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    return logger
