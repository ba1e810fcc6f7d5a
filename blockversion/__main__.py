"""Command line entry point for Block Version.

Validates a configuration file and evaluates the policy it describes
without a running server.
"""

import sys
from pathlib import Path

import click
import structlog
from dotenv import load_dotenv

from . import __version__
from .config import load_config, save_default_config
from .permissions import Capability
from .policy import ConfigError, PolicySnapshot, PolicyStore, decide
from .protocol import resolve_or_unknown, supported_versions
from .utils.logging import setup_logging


logger = structlog.get_logger()


def describe_policy(snapshot: PolicySnapshot) -> list[str]:
    """Render a snapshot as human readable lines."""
    whitelist = [str(v) for v in supported_versions() if v in snapshot.whitelist]
    blacklist = [str(v) for v in supported_versions() if v in snapshot.blacklist]

    lines = [
        f"Whitelisted: {', '.join(whitelist) or '(none)'}",
        f"Blacklisted: {', '.join(blacklist) or '(none)'}",
    ]
    if snapshot.whitelist_range_enabled:
        lines.append(f"Range: {snapshot.whitelist_start} - {snapshot.whitelist_end}")
    if snapshot.repeat_bypass_message < 0:
        lines.append("Bypass reminder: disabled")
    elif snapshot.repeat_bypass_message == 0:
        lines.append("Bypass reminder: once")
    else:
        lines.append(f"Bypass reminder: every {snapshot.repeat_bypass_message}s")
    if snapshot.recommended_version is not None:
        lines.append(f"Recommended: {snapshot.recommended_version}")
    return lines


@click.command()
@click.option(
    "-c",
    "--config",
    type=click.Path(dir_okay=False, path_type=Path),
    default="config.yml",
    help="Path to configuration file",
)
@click.option(
    "-e",
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=".env",
    help="Path to environment file",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Override log level from config",
)
@click.option("--init", is_flag=True, help="Write the default configuration if it is missing")
@click.option("--dry-run", is_flag=True, help="Only validate the configuration")
@click.option("--check", "versions", multiple=True, help="Version to evaluate (repeatable)")
@click.option("--bypass-all", is_flag=True, help="Evaluate as a player with bypass.all")
@click.option(
    "--bypass-blacklist", is_flag=True, help="Evaluate as a player with bypass.blacklist"
)
@click.version_option(version=__version__)
def main(
    config: Path,
    env_file: Path,
    log_level: str | None,
    init: bool,
    dry_run: bool,
    versions: tuple[str, ...],
    bypass_all: bool,
    bypass_blacklist: bool,
) -> None:
    """Block Version - protocol version gate.

    Loads the version policy from CONFIG and prints the admission decision
    for every --check version.
    """
    if env_file.exists():
        load_dotenv(env_file)

    if init and save_default_config(config):
        click.echo(f"Wrote default configuration to {config}")

    try:
        settings = load_config(config)
        if log_level:
            settings.logging.level = log_level
    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)

    setup_logging(
        level=settings.logging.level,
        format_type=settings.logging.format,
        log_file=settings.logging.file if not dry_run else None,
    )

    store = PolicyStore()
    try:
        snapshot = store.reload(settings)
    except ConfigError as e:
        logger.error("invalid_configuration", key=e.key, error=str(e))
        click.echo(f"Invalid configuration: {e}", err=True)
        sys.exit(1)

    if dry_run:
        click.echo("Configuration is valid!")
        sys.exit(0)

    if not versions:
        for line in describe_policy(snapshot):
            click.echo(line)
        return

    caps = set()
    if bypass_all:
        caps.add(Capability.BYPASS_ALL)
    if bypass_blacklist:
        caps.add(Capability.BYPASS_BLACKLIST)

    for value in versions:
        version = resolve_or_unknown(value)
        decision = decide(version, frozenset(caps), store)
        click.echo(f"{value} ({version.name}): {decision.value}")


if __name__ == "__main__":
    main()
