"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version

from gram.contracts.config import AUTH_MODES

SETTINGS_FILE_HELP = """Path to the settings TOML file, for example:

    description = "This is a test repository"

    [settings]
    merge.allow-squash = false
"""


def _package_version() -> str:
    try:
        return version("gram")
    except PackageNotFoundError:
        return "0.0.0"


def _non_negative_int(value: str) -> int:
    parsed = int(value)
    if parsed < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gram",
        description="Compare declared repository settings with the live settings on the hosting service.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    settings_parser = subparsers.add_parser("settings", help="Repository settings operations")
    settings_subparsers = settings_parser.add_subparsers(dest="settings_command", required=True)

    diff_parser = settings_subparsers.add_parser(
        "diff",
        help="Diff actual settings with expected settings defined in a settings file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=SETTINGS_FILE_HELP,
    )
    diff_parser.add_argument("--owner", "-o", required=True, help="The owner of the repository")
    diff_parser.add_argument("--repo", "-r", required=True, help="The name of the repository")
    diff_parser.add_argument(
        "--file", "-f", dest="settings_file", required=True, help="Path to the settings TOML file"
    )
    diff_parser.add_argument("--config", default=None, help="Path to an optional gram.json config file")
    diff_parser.add_argument(
        "--auth",
        choices=sorted(AUTH_MODES),
        default=None,
        help="Token source (default: env, which reads GITHUB_TOKEN)",
    )
    diff_parser.add_argument("--token", "-t", default=None, help="API token; implies --auth token")
    diff_parser.add_argument("--api-url", default=None, help="Base URL of the hosting API")
    diff_parser.add_argument(
        "--max-retries",
        type=_non_negative_int,
        default=None,
        help="Retries for transient API failures (default: 2)",
    )
    diff_parser.add_argument(
        "--ignore-extras",
        action="store_true",
        default=None,
        help="Only compare settings declared in the settings file",
    )
    diff_parser.add_argument(
        "--format",
        choices=("text", "table"),
        default="text",
        help="Report format (default: text)",
    )
    diff_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


__all__ = ["build_parser"]
