"""
Configuration management for Package Health Gate.

Values are resolved once at startup, in order of precedence:
1. Explicit overrides (CLI options)
2. PACKAGE_HEALTH_GATE_* environment variables
3. .package-health-gate.toml (local config)
4. pyproject.toml [tool.package-health-gate] (project-level config)
5. Built-in defaults

The GitHub token is resolved separately: the GITHUB_TOKEN environment variable
wins, then the GitHub Action input (INPUT_TOKEN), then the configured value.
"""

import os
import tomllib
from pathlib import Path
from typing import Any, NamedTuple

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

LOCAL_CONFIG_NAME = ".package-health-gate.toml"
PYPROJECT_NAME = "pyproject.toml"
TOOL_TABLE = "package-health-gate"
ENV_PREFIX = "PACKAGE_HEALTH_GATE_"

# Licenses rejected when found anywhere in the resolved license string
DEFAULT_BANNED_LICENSES = ("GPL", "AGPL", "LGPL", "SSPL", "CC", "Sleepycat")

# Global configuration for SSL verification
# Default: True (verify SSL certificates)
# Can be set to False by CLI --insecure flag
VERIFY_SSL = True


class GateConfig(NamedTuple):
    """Effective configuration for one gate run."""

    package_list_path: Path | None = None
    token: str | None = None
    # Popularity: any one threshold met is enough
    min_downloads: int = 10_000
    min_stars: int = 1000
    min_forks: int = 100
    # Monthly downloads at or above this mark a "large" project
    large_project_downloads: int = 1_000_000
    # Maintenance: months are approximated as 30 days
    max_months_since_push: int = 6
    max_open_issues: int = 100
    max_open_issues_large: int = 500
    # When set, a large project over its issue ceiling fails instead of warning
    strict_large_issues: bool = False
    banned_licenses: tuple[str, ...] = DEFAULT_BANNED_LICENSES
    exclude: tuple[str, ...] = ()


def load_config_file(config_path: Path) -> dict:
    """Load a TOML configuration file."""
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}") from e


def get_file_config(root: Path | None = None) -> dict[str, Any]:
    """
    Load the [tool.package-health-gate] table from configuration files.

    Priority:
    1. .package-health-gate.toml (local config, highest priority)
    2. pyproject.toml (project-level config, fallback)

    Args:
        root: Directory to look in. Defaults to the current working directory.

    Returns:
        The tool table, or an empty dict when no file defines one.
    """
    root = Path.cwd() if root is None else Path(root)

    for name in (LOCAL_CONFIG_NAME, PYPROJECT_NAME):
        config = load_config_file(root / name)
        table = config.get("tool", {}).get(TOOL_TABLE)
        if table:
            return dict(table)
    return {}


def _coerce(field: str, value: Any) -> Any:
    """Convert a raw file or environment value to the type of ``field``."""
    default = GateConfig._field_defaults[field]

    if field == "package_list_path":
        return Path(value).expanduser()
    if field == "token":
        return str(value)
    if isinstance(default, bool):
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)
    if isinstance(default, int):
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid integer for '{field}': {value!r}") from e
    if isinstance(default, tuple):
        if isinstance(value, str):
            value = value.split(",")
        return tuple(str(item).strip() for item in value if str(item).strip())
    return value


def _env_config() -> dict[str, Any]:
    values = {}
    for field in GateConfig._fields:
        if field == "token":
            continue
        raw = os.getenv(f"{ENV_PREFIX}{field.upper()}")
        if raw:
            values[field] = raw
    # GitHub Action input
    action_path = os.getenv("INPUT_PACKAGE_LIST_PATH")
    if action_path and "package_list_path" not in values:
        values["package_list_path"] = action_path
    return values


def resolve_token(configured: str | None = None) -> str | None:
    """
    Resolve the GitHub access token.

    Priority:
    1. GITHUB_TOKEN environment variable
    2. INPUT_TOKEN (GitHub Action input)
    3. The configured value (CLI option or config file)

    Returns:
        The token, or None if none is available.
    """
    for candidate in (
        os.getenv("GITHUB_TOKEN"),
        os.getenv("INPUT_TOKEN"),
        configured,
    ):
        if candidate:
            return candidate
    return None


def load_gate_config(
    overrides: dict[str, Any] | None = None, root: Path | None = None
) -> GateConfig:
    """
    Build the effective configuration.

    Args:
        overrides: Explicit values (typically CLI options). None values are ignored.
        root: Directory holding the configuration files.

    Returns:
        GateConfig with every layer applied.

    Raises:
        ValueError: If a configuration file or value is invalid.
    """
    values: dict[str, Any] = {}
    layers = [get_file_config(root), _env_config(), overrides or {}]

    for layer in layers:
        for key, value in layer.items():
            field = key.replace("-", "_")
            if field not in GateConfig._fields or value is None:
                continue
            values[field] = _coerce(field, value)

    values["token"] = resolve_token(values.get("token"))
    return GateConfig(**values)


def is_package_excluded(package_name: str, config: GateConfig) -> bool:
    """
    Check if a package is in the excluded list.

    Args:
        package_name: Name of the package to check.
        config: Effective configuration.

    Returns:
        True if the package is excluded, False otherwise.
    """
    return package_name.lower() in [pkg.lower() for pkg in config.exclude]


def set_verify_ssl(verify: bool) -> None:
    """
    Set the SSL verification setting globally.

    Args:
        verify: Whether to verify SSL certificates.
    """
    global VERIFY_SSL
    VERIFY_SSL = verify


def get_verify_ssl() -> bool:
    """
    Get the current SSL verification setting.

    Returns:
        Whether SSL verification is enabled.
    """
    return VERIFY_SSL
