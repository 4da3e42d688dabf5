"""
SCIT CLI — Command-line interface for interface extraction and validation.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from scit import __version__
from scit.core.engine import Engine
from scit.core.logging import LogChannel, configure_logging, get_logger
from scit.core.network import select_network
from scit.dialect.loader import DialectError, get_dialect, load_dialect_from_path
from scit.dialect.models import Dialect
from scit.ir.enums import ReportStatus, VariantKind
from scit.ir.schema import ContractInterface, ExtractionDiagnostic
from scit.ir.serialization import arguments_from_json, report_to_json, to_json

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_USAGE = 2


class UsageError(Exception):
    """Input the CLI cannot work with; reported without a traceback."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scit",
        description="Soroban Contract Interface Toolkit",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"scit {__version__}",
    )

    # Logging configuration
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["silent", "info", "verbose", "debug"],
        default=None,
        help="Log verbosity level (default: info, or SCIT_LOG_LEVEL env var)",
    )
    parser.add_argument(
        "--log-channel",
        type=str,
        default=None,
        help="Comma-separated log channels to show (extract,validate,pipeline,config,system). Default: all",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="Parse interface text")
    parse_parser.add_argument(
        "input",
        type=str,
        help="Interface text or path to file (use - for stdin)",
    )
    parse_parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Output file path (default: stdout)",
    )
    parse_parser.add_argument(
        "--format",
        choices=["json", "summary"],
        default="json",
        help="Output format: json (default) or summary",
    )
    _add_dialect_argument(parse_parser)

    # Validate command
    validate_parser = subparsers.add_parser(
        "validate", help="Validate invocation arguments against an interface"
    )
    validate_parser.add_argument(
        "input",
        type=str,
        help="Interface text or path to file (use - for stdin)",
    )
    validate_parser.add_argument(
        "--method",
        type=str,
        required=True,
        help="Method to invoke",
    )
    validate_parser.add_argument(
        "--args",
        type=str,
        required=True,
        help="JSON list of {name, type, value} records, a path to one, or - for stdin",
    )
    validate_parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Output file path (default: stdout)",
    )
    _add_dialect_argument(validate_parser)

    # Network command
    network_parser = subparsers.add_parser(
        "network", help="Show the network an RPC URL points at"
    )
    network_parser.add_argument("url", type=str, help="RPC URL")

    return parser


def _add_dialect_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dialect",
        type=str,
        default=None,
        help="Dialect name or path to a dialect YAML file (default: soroban, or SCIT_DIALECT env var)",
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    channels = None
    if args.log_channel:
        channels = [ch.strip() for ch in args.log_channel.split(",")]
    configure_logging(level=args.log_level, channels=channels, force=True)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    commands = {
        "parse": run_parse,
        "validate": run_validate,
        "network": run_network,
    }

    log = get_logger(LogChannel.SYSTEM)
    try:
        return commands[args.command](args)
    except (UsageError, FileNotFoundError, DialectError) as e:
        log.error("command_failed", command=args.command, error=str(e))
        print(f"scit: error: {e}", file=sys.stderr)
        return EXIT_USAGE


# =============================================================================
# Commands
# =============================================================================

def run_parse(args: argparse.Namespace) -> int:
    """Run parse command."""
    engine = Engine(resolve_dialect(args.dialect))
    interface, diagnostics = engine.describe_with_diagnostics(read_input(args.input))

    if args.format == "summary":
        output = format_summary(interface, diagnostics)
    else:
        output = to_json(interface)

    write_output(output, args.output)
    return EXIT_OK


def run_validate(args: argparse.Namespace) -> int:
    """Run validate command."""
    if args.input == "-" and args.args == "-":
        raise UsageError("only one of INPUT and --args can be read from stdin")

    engine = Engine(resolve_dialect(args.dialect))
    interface = engine.describe(read_input(args.input))

    try:
        arguments = arguments_from_json(read_input(args.args))
    except PydanticValidationError as e:
        raise UsageError(f"invalid --args payload: {e}") from e

    report = engine.check(interface, args.method, arguments)
    write_output(report_to_json(report), args.output)

    if report.status in (ReportStatus.ACCEPTED, ReportStatus.SKIPPED):
        return EXIT_OK
    return EXIT_REJECTED


def run_network(args: argparse.Namespace) -> int:
    """Run network command."""
    network = select_network(args.url)
    print(f"{network.value}\t{network.passphrase}")
    return EXIT_OK


# =============================================================================
# Helpers
# =============================================================================

def resolve_dialect(value: Optional[str]) -> Dialect:
    """A dialect name, or a path when the value names a YAML file."""
    if value and value.endswith((".yaml", ".yml")):
        return load_dialect_from_path(value)
    return get_dialect(value)


def read_input(value: str) -> str:
    """Read `-` from stdin, an existing path from disk, else use the text itself."""
    if value == "-":
        return sys.stdin.read()
    # Only check as path if it's short enough to be a valid path
    if len(value) < 256 and "\n" not in value:
        path = Path(value)
        if path.is_file():
            return path.read_text()
    return value


def write_output(output: str, path: Optional[str]) -> None:
    if path:
        Path(path).write_text(output + "\n")
    else:
        print(output)


def format_summary(
    interface: ContractInterface, diagnostics: list[ExtractionDiagnostic]
) -> str:
    """Human-readable listing of an interface."""
    lines = [f"Contract: {interface.name}", ""]

    lines.append(f"Methods ({len(interface.methods)})")
    for method in interface.methods:
        params = ", ".join(f"{p.name}: {p.type}" for p in method.parameters)
        lines.append(f"  {method.name}({params}) -> {method.return_type}")

    lines.append("")
    lines.append(f"Structs ({len(interface.structs)})")
    for struct in interface.structs:
        lines.append(f"  {struct.name}")
        for field in struct.fields:
            lines.append(f"    {field.visibility.value} {field.name}: {field.type}")

    lines.append("")
    lines.append(f"Enums ({len(interface.enums)})")
    for enum in interface.enums:
        marker = " [error]" if enum.is_error else ""
        lines.append(f"  {enum.name}{marker}")
        for variant in enum.variants:
            if variant.kind == VariantKind.DISCRIMINANT:
                lines.append(f"    {variant.name} = {variant.value}")
            elif variant.kind == VariantKind.PAYLOAD:
                lines.append(f"    {variant.name}({variant.data_type})")
            else:
                lines.append(f"    {variant.name}")

    if diagnostics:
        lines.append("")
        lines.append(f"Skipped blocks ({len(diagnostics)})")
        for diag in diagnostics:
            lines.append(f"  line {diag.line} [{diag.kind.value}] {diag.reason}: {diag.excerpt}")

    return "\n".join(lines)


if __name__ == "__main__":
    sys.exit(main())
