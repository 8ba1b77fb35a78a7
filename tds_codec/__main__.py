#!/usr/bin/env python3
"""
TDS Codec Main Entry Point
==========================

Convert single column values from the command line.

Usage:
    python -m tds_codec decode TYPE HEX
    python -m tds_codec encode TYPE VALUE

Examples:
    # Decode an int column
    tds-codec decode INT 2a000000

    # Encode a datetime parameter
    tds-codec encode DATETIME 2024-02-29T12:30:00Z

    # Show how a column is bound
    tds-codec bindtype SYBMONEY4

    # Generate sample config
    tds-codec generate-config > codec.yaml
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer

from tds_codec import __version__
from tds_codec.config import CodecConfig, create_sample_config, default_config, load_config_with_env
from tds_codec.tds import (
    TDSCodecError, TYPE_INFO,
    bind_type, decode, encode, lookup, wire_width, report_unknown_types,
    format_value, hexdump, parse_hex, parse_literal, resolve_type,
)

app = typer.Typer(
    name="tds-codec",
    help="Convert TDS column values between wire bytes and native values",
    add_completion=False,
)

logger = logging.getLogger(__name__)


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class DumpFormat(str, Enum):
    hex = "hex"
    hexdump = "hexdump"


def setup_logging(config: CodecConfig):
    """Configure logging"""
    numeric_level = getattr(logging, config.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Unknown type fallbacks are logged at DEBUG unless asked for
    report_unknown_types(config.log_unknown_types)


def _resolve(type_arg: str) -> int:
    try:
        return resolve_type(type_arg)
    except ValueError as e:
        raise typer.BadParameter(str(e))


def _fail(message: str):
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def version_callback(value: bool):
    if value:
        typer.echo(f"TDS Codec {__version__}")
        raise typer.Exit()


@app.command("types")
def types():
    """List supported data types."""
    typer.echo(f"{'TYPE':<14} {'CODE':>4} {'WIDTH':>5}  {'SHAPE':<10} BIND")
    for tag, info in TYPE_INFO.items():
        width = str(info.width) if info.width is not None else "var"
        typer.echo(f"{info.name:<14} {int(tag):>4} {width:>5}  {info.shape.value:<10} {info.bind.name}")


@app.command("decode")
def decode_command(
    type_name: Annotated[str, typer.Argument(help="Data type name or code")],
    data: Annotated[str, typer.Argument(help="Wire bytes as hex")],
):
    """Decode wire bytes into a value."""
    tag = _resolve(type_name)
    try:
        raw = parse_hex(data)
    except ValueError as e:
        _fail(f"Invalid hex data: {e}")

    width = wire_width(tag)
    if width is not None and len(raw) != width:
        _fail(f"{lookup(tag).name} takes {width} bytes, got {len(raw)}")

    value = decode(tag, raw)
    logger.debug(f"Decoded {len(raw)} bytes as {value.shape.value}")
    typer.echo(format_value(value))


@app.command("encode")
def encode_command(
    ctx: typer.Context,
    type_name: Annotated[str, typer.Argument(help="Data type name or code")],
    value: Annotated[str, typer.Argument(help="Value to encode")],
    dump_format: Annotated[
        Optional[DumpFormat],
        typer.Option("-f", "--format", help="Output format, defaults to the configured one"),
    ] = None,
):
    """Encode a value into wire bytes."""
    config: CodecConfig = ctx.obj or default_config()
    tag = _resolve(type_name)
    info = lookup(tag)

    try:
        typed = parse_literal(info.shape, value)
        data = encode(tag, typed)
    except (TDSCodecError, TypeError, ValueError, OverflowError) as e:
        _fail(str(e))

    output = dump_format.value if dump_format else config.dump_format
    if output == DumpFormat.hexdump.value:
        typer.echo(hexdump(data))
    else:
        typer.echo(data.hex())


@app.command("bindtype")
def bindtype_command(
    type_name: Annotated[str, typer.Argument(help="Data type name or code")],
):
    """Show the db-lib bind type for a data type."""
    tag = _resolve(type_name)
    bind = bind_type(tag)
    typer.echo(f"{bind.name} ({int(bind)})")


@app.command("generate-config")
def generate_config():
    """Generate a sample configuration file."""
    typer.echo(create_sample_config())


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config: Annotated[
        Optional[Path],
        typer.Option(
            "-c",
            "--config",
            help="Path to YAML configuration file",
            exists=True,
            readable=True,
        ),
    ] = None,
    log_level: Annotated[
        Optional[LogLevel],
        typer.Option("-l", "--log-level", help="Logging level"),
    ] = None,
    version: Annotated[
        bool,
        typer.Option("-v", "--version", callback=version_callback, is_eager=True, help="Show version"),
    ] = False,
):
    """Convert TDS column values between wire bytes and native values."""
    if config:
        try:
            codec_config = load_config_with_env(str(config))
        except (OSError, ValueError) as e:
            typer.echo(f"Failed to load config: {e}", err=True)
            raise typer.Exit(1)
    else:
        codec_config = default_config()

    if log_level:
        codec_config.log_level = log_level.value

    setup_logging(codec_config)
    if config:
        logger.info(f"Loaded configuration from {config}")
    ctx.obj = codec_config

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


if __name__ == "__main__":
    app()
