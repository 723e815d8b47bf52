import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import click

from .. import __version__
from .._lockb import Lockfile, decode
from ..console import print_error, print_success, print_summary_table
from ..exceptions import ConfigurationError, FileProcessingError, LockbError
from ..logging_config import logger, setup_logging
from ..yarn_v1 import render_yarn_v1

LOCKB_VERSION = __version__
LOCKB_TOOL_NAME = "bun-lockb"
DEFAULT_LOCK_FILE = "bun.lockb"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@dataclass
class Config:
    """Configuration settings for a bun-lockb run."""

    lock_file: str = DEFAULT_LOCK_FILE
    output_file: Optional[str] = None
    log_level: str = "WARNING"
    structured_logs: bool = False
    summary: bool = False

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not self.lock_file:
            raise ConfigurationError("Lockfile path is empty")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level '{self.log_level}'. Expected one of: {', '.join(LOG_LEVELS)}")
        if self.output_file is not None and not self.output_file:
            raise ConfigurationError("Output file path is empty")


def build_config(
    lock_file: Optional[str] = None,
    output_file: Optional[str] = None,
    log_level: Optional[str] = None,
    structured_logs: bool = False,
    summary: bool = False,
) -> Config:
    """
    Build a validated configuration from CLI values.

    Environment variable fallbacks are applied by click before this is
    called; anything still unset gets its default here.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    config = Config(
        lock_file=lock_file or DEFAULT_LOCK_FILE,
        output_file=output_file,
        log_level=(log_level or "WARNING").upper(),
        structured_logs=structured_logs,
        summary=summary,
    )
    config.validate()

    return config


def read_lockfile(path: str) -> bytes:
    """
    Read the binary lockfile.

    Raises:
        FileProcessingError: If the file cannot be read
    """
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise FileProcessingError(f"Cannot read lockfile '{path}': {e.strerror or e}") from e


def write_output(path: str, text: str) -> None:
    """
    Write the rendered lockfile verbatim.

    Raises:
        FileProcessingError: If the file cannot be written
    """
    try:
        Path(path).write_text(text, encoding="utf-8")
    except OSError as e:
        raise FileProcessingError(f"Cannot write output file '{path}': {e.strerror or e}") from e


def run(config: Config) -> Lockfile:
    """
    Decode the configured lockfile and print or write its yarn v1 rendering.

    Returns:
        The decoded lockfile

    Raises:
        LockbError: On any read, decode or write failure
    """
    logger.info(f"Reading lockfile: {config.lock_file}")
    data = read_lockfile(config.lock_file)

    lockfile = decode(data)
    text = render_yarn_v1(lockfile)

    if config.output_file:
        write_output(config.output_file, text)
        logger.info(f"Wrote {len(lockfile.packages)} package(s) to {config.output_file}")
        print_success(f"Wrote {config.output_file}")
    else:
        click.echo(text)

    if config.summary:
        print_summary_table(
            "Lockfile summary",
            [
                ("Packages", len(lockfile.packages)),
                ("With integrity", sum(1 for p in lockfile.packages if p.integrity)),
                ("Registry resolutions", sum(1 for p in lockfile.packages if p.version)),
                ("Declared dependencies", sum(len(p.dependencies) for p in lockfile.packages)),
            ],
        )

    return lockfile


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("lock_file", required=False, envvar="LOCK_FILE", metavar="[LOCKFILE]")
@click.option(
    "-o",
    "--output",
    "output_file",
    envvar="OUTPUT_FILE",
    help="Write the yarn lockfile here instead of printing it.",
)
@click.option(
    "--log-level",
    envvar="LOG_LEVEL",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Diagnostic verbosity (diagnostics go to stderr).",
)
@click.option(
    "--structured-logs/--no-structured-logs",
    envvar="STRUCTURED_LOGS",
    default=False,
    help="Emit diagnostics as JSON lines.",
)
@click.option("--summary", is_flag=True, default=False, help="Print package statistics to stderr.")
@click.version_option(
    LOCKB_VERSION, "-v", "-V", "--version", prog_name=LOCKB_TOOL_NAME, message="%(prog)s, %(version)s"
)
def cli(
    lock_file: Optional[str],
    output_file: Optional[str],
    log_level: str,
    structured_logs: bool,
    summary: bool,
) -> None:
    """Parse and print bun.lockb in text format.

    Reads LOCKFILE (default: ./bun.lockb) and prints it in yarn lockfile v1 format.
    """
    try:
        config = build_config(
            lock_file=lock_file,
            output_file=output_file,
            log_level=log_level,
            structured_logs=structured_logs,
            summary=summary,
        )
        setup_logging(config.log_level, structured=config.structured_logs)
        run(config)
    except LockbError as e:
        logger.debug("Run failed", exc_info=True)
        print_error(str(e))
        sys.exit(1)


def main() -> None:
    """Main entry point for the bun-lockb command."""
    cli()
