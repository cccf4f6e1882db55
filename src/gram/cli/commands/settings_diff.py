"""Settings diff command."""

from __future__ import annotations

import argparse

from gram import DiffResult, GramConfig
from gram.cli.progress.rich import RichDiffProgress
from gram.diff.reporter import RichDiffReporter, format_diff_report


def resolve_config(args: argparse.Namespace) -> GramConfig:
    """Merge the optional config file with command-line overrides."""
    import gram.cli as cli

    base = cli.load_config(args.config) if args.config else None
    auth = args.auth
    if args.token is not None and auth is None:
        auth = "token"
    return cli.build_config(
        base,
        auth=auth,
        token=args.token,
        api_url=args.api_url,
        max_retries=args.max_retries,
        ignore_extras=args.ignore_extras,
    )


def render_result(result: DiffResult, args: argparse.Namespace) -> None:
    if args.format == "table":
        RichDiffReporter().render(result, owner=args.owner, repo=args.repo)
        return
    print(format_diff_report(result, owner=args.owner, repo=args.repo))


async def run_settings_diff(args: argparse.Namespace) -> DiffResult:
    import gram.cli as cli

    config = resolve_config(args)

    if not args.verbose:
        with RichDiffProgress() as progress:
            gram = await cli.Gram.from_config(config, progress=progress)
            result = await gram.diff_settings(owner=args.owner, repo=args.repo, settings_path=args.settings_file)
    else:
        gram = await cli.Gram.from_config(config)
        result = await gram.diff_settings(owner=args.owner, repo=args.repo, settings_path=args.settings_file)

    render_result(result, args)
    return result


__all__ = ["render_result", "resolve_config", "run_settings_diff"]
