"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import sys

from gram import ConfigError, ProviderError, SettingsLoadError

EXIT_OK = 0
EXIT_DRIFT = 1
EXIT_USAGE = 2
EXIT_SETTINGS_ERROR = 3
EXIT_PROVIDER_ERROR = 4
EXIT_UNEXPECTED = 5


def main(argv: list[str] | None = None) -> int:
    import gram.cli as cli

    parser = cli.build_parser()
    args = parser.parse_args(argv)

    if args.command != "settings" or args.settings_command != "diff":  # pragma: no cover - argparse enforces
        print(f"error: unsupported command: {args.command}", file=sys.stderr)
        return EXIT_USAGE

    if args.verbose:
        cli.logging.basicConfig(level=cli.logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        result = cli.asyncio.run(cli._run_settings_diff(args))
    except (ConfigError, SettingsLoadError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_SETTINGS_ERROR
    except ProviderError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_PROVIDER_ERROR
    except Exception as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_UNEXPECTED

    return EXIT_DRIFT if result.has_drift else EXIT_OK


__all__ = ["EXIT_DRIFT", "EXIT_OK", "EXIT_PROVIDER_ERROR", "EXIT_SETTINGS_ERROR", "EXIT_UNEXPECTED", "main"]
