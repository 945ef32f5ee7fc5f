"""Chronicle CLI interface.

Commands:
- render: Render a changelog from a release data file
- validate: Validate a changelog template
- init: Initialize Chronicle configuration

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: Emit logs as JSON lines
- --version: Show version and exit
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer

from chronicle import __version__
from chronicle.changelog import Changelog
from chronicle.config import ChronicleConfig, create_default_config, load_config
from chronicle.data import load_releases
from chronicle.errors import ChronicleError, ConfigError, TemplateParseError
from chronicle.templates import Template
from chronicle.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="chronicle",
    help="Render changelogs from release data with Jinja2 templates",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: ChronicleConfig | None = None
_logger = get_logger()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"chronicle {__version__}")
        raise typer.Exit()


ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Chronicle YAML config to use", exists=True, dir_okay=False),
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Log debug detail with timestamps")]
QuietOption = Annotated[bool, typer.Option("--quiet", "-q", help="Log warnings and errors only")]
CiOption = Annotated[bool, typer.Option("--ci", help="Log JSON lines to stderr")]
VersionOption = Annotated[
    bool,
    typer.Option("--version", callback=version_callback, is_eager=True, help="Print the chronicle version"),
]


@app.callback()
def main(
    config: ConfigOption = None,
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
    ci: CiOption = False,
    version: VersionOption = False,
) -> None:
    """Chronicle - changelog rendering from structured release data."""
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        _config = load_config(config_path=config)
        if _config.config_path:
            _logger.debug(f"Loaded config from: {_config.config_path}")
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except (ConfigError, ValueError) as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)


def _parse_groups(groups: str) -> list[str]:
    """Split a comma-separated group list, dropping blanks."""
    return [group.strip() for group in groups.split(",") if group.strip()]


# =============================================================================
# render command
# =============================================================================


@app.command()
def render(
    data: Annotated[
        Path,
        typer.Argument(
            help="Release data file (YAML or JSON, newest release first)",
            exists=True,
            dir_okay=False,
        ),
    ],
    template: Annotated[
        Path | None,
        typer.Option(
            "--template",
            "-t",
            help="Body template file (overrides the configured body)",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    groups: Annotated[
        str | None,
        typer.Option(
            "--groups",
            "-g",
            help="Comma-separated commit groups, in output order (e.g. feat,fix)",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the changelog to this file instead of stdout",
        ),
    ] = None,
) -> None:
    """Render a changelog from release data.

    Exit codes:
        0: Changelog rendered
        1: Invalid release data, configuration or template
    """
    config = _config or ChronicleConfig()
    changelog_config = config.changelog

    try:
        if template is not None:
            changelog_config = replace(changelog_config, body=template.read_text(encoding="utf-8"))
        if groups is not None:
            changelog_config = replace(changelog_config, groups=_parse_groups(groups))

        releases = load_releases(data)
        changelog = Changelog(releases, changelog_config, config.template)

        if output is None:
            typer.echo(changelog.generate(), nl=False)
        else:
            changelog.write(output)
            typer.echo(f"✅ Changelog written to {output}")
    except ChronicleError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except UnicodeDecodeError as e:
        _logger.error(f"Template file is not valid UTF-8: {template} ({e})")
        raise typer.Exit(1)
    except OSError as e:
        _logger.error(f"File error: {e}")
        raise typer.Exit(1)

    _logger.structured(
        logging.INFO,
        "Render complete",
        releases=len(releases),
        groups=changelog_config.groups,
    )


# =============================================================================
# init command
# =============================================================================


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite existing config",
        ),
    ] = False,
) -> None:
    """Initialize Chronicle configuration.

    Creates .chronicle/config.yaml with the default changelog layout.
    """
    chronicle_dir = Path(".chronicle")
    chronicle_dir.mkdir(exist_ok=True)

    config_file = chronicle_dir / "config.yaml"

    if config_file.exists() and not force:
        _logger.error(f"Config already exists: {config_file}")
        _logger.info("Use --force to overwrite")
        raise typer.Exit(1)

    config_file.write_text(create_default_config(), encoding="utf-8")
    _logger.info(f"Created config: {config_file}")

    typer.echo("✅ Chronicle configuration initialized")
    typer.echo(f"   Config: {config_file}")


# =============================================================================
# validate command
# =============================================================================


@app.command()
def validate(
    template: Annotated[
        Path,
        typer.Argument(
            help="Path to Jinja2 template to validate",
            exists=True,
            dir_okay=False,
        ),
    ],
) -> None:
    """Validate a changelog template.

    Compiles the template with the Chronicle filters registered, so unknown
    filters are reported as well as syntax errors.
    """
    _logger.info(f"Validating template: {template}")

    config = _config or ChronicleConfig()
    try:
        Template(template.read_text(encoding="utf-8"), config.template)
    except TemplateParseError as e:
        _logger.error(f"Template syntax error: {e.message}")
        typer.echo(f"❌ Template syntax error: {e.message}")
        raise typer.Exit(1)
    except ChronicleError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except (OSError, UnicodeDecodeError) as e:
        _logger.error(f"Failed to read template {template}: {e}")
        raise typer.Exit(1)

    typer.echo(f"✅ Template is valid: {template}")


if __name__ == "__main__":
    app()
