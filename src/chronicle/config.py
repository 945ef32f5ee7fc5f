"""Chronicle configuration system.

Configuration is YAML-based with a handful of CLI overrides (--template, --groups).
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.chronicle/config.yaml
3. ./chronicle.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from chronicle.errors import ConfigError

DEFAULT_GROUPS: list[str] = ["feat", "fix", "perf", "refactor", "docs"]

DEFAULT_BODY = """\
{% if version %}## {{ version }}{% else %}## Unreleased{% endif %}
{% for group, members in (commits | commit_groups).items() %}
### {{ group | upper_first }}

{% for commit in members -%}
- {{ commit.message | upper_first }}
{% endfor %}
{%- endfor %}
"""

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class TemplateConfig:
    """Template engine options.

    Attributes:
        trim_blocks: Remove the first newline after a block tag
        lstrip_blocks: Strip whitespace before a block tag on its line
        keep_trailing_newline: Keep the template's final newline
        strict_undefined: Fail on variables the context does not define
    """

    trim_blocks: bool = False
    lstrip_blocks: bool = False
    keep_trailing_newline: bool = True
    strict_undefined: bool = True


@dataclass
class ChangelogConfig:
    """Changelog layout.

    Attributes:
        header: Template rendered once before all releases
        body: Template rendered once per release
        footer: Template rendered once after all releases
        trim: Strip leading/trailing whitespace from each rendered release
        groups: Commit groups to include, in presentation order
    """

    header: str | None = None
    body: str = DEFAULT_BODY
    footer: str | None = None
    trim: bool = True
    groups: list[str] = field(default_factory=lambda: list(DEFAULT_GROUPS))

    def __post_init__(self) -> None:
        """Validate changelog configuration."""
        for name in ("header", "footer"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ConfigError(f"Changelog {name} must be a string (got {value!r})")

        if not isinstance(self.body, str) or not self.body.strip():
            raise ConfigError("Changelog body template must not be empty")

        if not isinstance(self.groups, list) or not all(isinstance(g, str) for g in self.groups):
            raise ConfigError(f"Changelog groups must be a list of strings (got {self.groups!r})")


@dataclass
class ChronicleConfig:
    """Top-level Chronicle configuration.

    Attributes:
        template: Template engine options
        changelog: Header/body/footer templates and group order
    """

    template: TemplateConfig = field(default_factory=TemplateConfig)
    changelog: ChangelogConfig = field(default_factory=ChangelogConfig)

    # Runtime overrides (set by CLI)
    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax for environment variable substitution.
    Example: ${PROJECT_NAME} -> value of PROJECT_NAME

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted
    """
    if isinstance(value, str):
        # Pattern: ${VAR_NAME}
        pattern = re.compile(r"\$\{([^}]+)\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return pattern.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Search order:
    1. ./.chronicle/config.yaml
    2. ./chronicle.yaml

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".chronicle" / "config.yaml",
        start_path / "chronicle.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a config section as a dict (empty if absent or null)."""
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"Config section `{name}` must be a mapping (got {type(section).__name__})")
    return section


def _flag(section: dict[str, Any], section_name: str, key: str, default: bool) -> bool:
    """Return a boolean option, rejecting non-boolean values such as "false"."""
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"Config option `{section_name}.{key}` must be true or false (got {value!r})")
    return value


def load_config_from_dict(data: dict[str, Any]) -> ChronicleConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        ChronicleConfig instance

    Raises:
        ConfigError: If the document or a section has invalid values
    """
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping (got {type(data).__name__})")

    # Apply environment variable substitution
    data = substitute_env_vars(data)

    config = ChronicleConfig()

    # Template engine options
    if "template" in data:
        template_data = _section(data, "template")
        defaults = config.template
        config.template = TemplateConfig(
            trim_blocks=_flag(template_data, "template", "trim_blocks", defaults.trim_blocks),
            lstrip_blocks=_flag(template_data, "template", "lstrip_blocks", defaults.lstrip_blocks),
            keep_trailing_newline=_flag(
                template_data, "template", "keep_trailing_newline", defaults.keep_trailing_newline
            ),
            strict_undefined=_flag(
                template_data, "template", "strict_undefined", defaults.strict_undefined
            ),
        )

    # Changelog layout
    if "changelog" in data:
        changelog_data = _section(data, "changelog")
        defaults_changelog = config.changelog
        config.changelog = ChangelogConfig(
            header=changelog_data.get("header"),
            body=changelog_data.get("body", defaults_changelog.body),
            footer=changelog_data.get("footer"),
            trim=_flag(changelog_data, "changelog", "trim", defaults_changelog.trim),
            groups=changelog_data.get("groups", list(defaults_changelog.groups)),
        )

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> ChronicleConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        ChronicleConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
        ConfigError: If the file cannot be read or has invalid values
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is not None:
        try:
            with open(found_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise ConfigError(f"Could not read config file {found_path}: {e}") from e
        config = load_config_from_dict(data)
        config._config_path = found_path
    else:
        config = ChronicleConfig()

    return config


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    body = "\n".join(f"    {line}" if line else "" for line in DEFAULT_BODY.splitlines())
    groups = ", ".join(f'"{group}"' for group in DEFAULT_GROUPS)
    return f'''# Chronicle Configuration

# Template engine options
template:
  trim_blocks: false
  lstrip_blocks: false
  keep_trailing_newline: true
  strict_undefined: true   # fail on variables the release does not define

# Changelog layout
changelog:
  header: |
    # Changelog
  # Rendered once per release. Available: version, commit_id, timestamp,
  # previous, commits, commit_groups_filter (the groups below).
  body: |
{body}
  # footer: "<!-- generated by chronicle -->"
  trim: true
  # Commit groups to include, in presentation order
  groups: [{groups}]
'''
