# SPDX-License-Identifier: MIT
"""CLI entry point for the versionkit command."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Union

import click

from .compare import sort_versions
from .config import ConfigError, VersionKitConfig, load_config
from .named import NamedVersion
from .single import InvalidVersionError, SingleVersion
from .version import Version


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.config: Optional[VersionKitConfig] = None
        self.verbose: bool = False
        self.project_dir: Optional[Path] = None

    def load_config(self) -> VersionKitConfig:
        """Load configuration, caching the result."""
        if self.config is None:
            self.config = load_config(self.project_dir)
        return self.config

    def use_named(self, named: Optional[bool]) -> bool:
        return self.load_config().named if named is None else named


pass_context = click.make_pass_decorator(Context, ensure=True)


def echo_error(message: str) -> None:
    """Print an error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def _parse(text: str, named: bool) -> Union[Version, NamedVersion]:
    parsed = NamedVersion.parse(text) if named else Version.parse(text)
    if parsed is None:
        kind = "named version" if named else "version"
        raise InvalidVersionError(text, f"Invalid {kind} string: {text!r}")
    return parsed


def _contains_exact_names(versions: NamedVersion, wanted: NamedVersion, loose: bool) -> bool:
    """Like NamedVersion.contains(), but names must also match case exactly."""
    for item in wanted:
        if not any(
            present.name == item.name
            and (present.loosely_equals(item) if loose else present == item)
            for present in versions
        ):
            return False
    return True


def _single_to_dict(version: SingleVersion) -> dict[str, Any]:
    return {
        "major": version.major,
        "minor": version.minor,
        "revision": version.revision,
        "build_number": version.build_number,
        "prerelease": list(version.prerelease),
        "build": list(version.build),
    }


def _to_dict(value: Union[Version, NamedVersion]) -> dict[str, Any]:
    if isinstance(value, NamedVersion):
        versions = [
            {"name": v.name, "versions": [_single_to_dict(s) for s in v.version]}
            for v in value.versions
        ]
    else:
        versions = [_single_to_dict(v) for v in value]
    return {
        "kind": value.kind.value,
        "description": value.description,
        "sorted_description": value.sorted_description,
        "versions": versions,
    }


named_option = click.option(
    "--named/--plain",
    default=None,
    help="Parse arguments as named versions (e.g. 'LibX 1.2') or plain versions.",
)


@click.group()
@click.version_option(package_name="versionkit")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output.",
)
@click.option(
    "-C",
    "--directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Look for pyproject.toml configuration starting from this directory.",
)
@pass_context
def cli(ctx: Context, verbose: bool, directory: Optional[Path]) -> None:
    """Parse, compare and sort version strings.

    \b
    Examples:
        versionkit parse "1.0 + 2.0.0-rc1"
        versionkit parse --named "LibX 1.2.3 + Tool 9" --json
        versionkit compare 1.0.9 1.9.0
        versionkit sort 2.0 1.0-beta 1.0
        versionkit contains "LibA 1.0 + LibB 2.1" liba --major 1
    """
    ctx.verbose = verbose
    ctx.project_dir = directory
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("text")
@named_option
@click.option(
    "--sorted/--unsorted",
    "sort_output",
    default=None,
    help="Sort compound output (defaults to the configured value).",
)
@click.option("--json", "as_json", is_flag=True, help="Print the parsed value as JSON.")
@pass_context
def parse(
    ctx: Context, text: str, named: Optional[bool], sort_output: Optional[bool], as_json: bool
) -> None:
    """Parse TEXT and print its canonical form."""
    config = ctx.load_config()
    try:
        value = _parse(text, ctx.use_named(named))
    except InvalidVersionError as e:
        echo_error(e.message)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(_to_dict(value), indent=2))
        return

    if sort_output is None:
        sort_output = config.sort
    click.echo(value.sorted_description if sort_output else value.description)


@cli.command()
@click.argument("first")
@click.argument("second")
@named_option
@pass_context
def compare(ctx: Context, first: str, second: str, named: Optional[bool]) -> None:
    """Compare FIRST with SECOND.

    Prints the relation and exits 0, e.g. "1.0.9 < 1.9.0".
    """
    use_named = ctx.use_named(named)
    try:
        lhs = _parse(first, use_named)
        rhs = _parse(second, use_named)
    except InvalidVersionError as e:
        echo_error(e.message)
        sys.exit(1)

    if lhs == rhs:
        # Equality ignores case and compound order
        symbol = "=="
    else:
        symbol = "<" if lhs.compare(rhs) < 0 else ">"
    click.echo(f"{lhs} {symbol} {rhs}")


@cli.command(name="sort")
@click.argument("versions", nargs=-1, required=True)
@named_option
@click.option("-r", "--reverse", is_flag=True, help="Sort from highest to lowest.")
@pass_context
def sort_command(
    ctx: Context, versions: tuple[str, ...], named: Optional[bool], reverse: bool
) -> None:
    """Sort VERSIONS and print one per line."""
    try:
        ordered = sort_versions(versions, named=ctx.use_named(named), reverse=reverse)
    except InvalidVersionError as e:
        echo_error(e.message)
        sys.exit(1)

    for value in ordered:
        click.echo(value.description)


@cli.command()
@click.argument("haystack")
@click.argument("needle")
@click.option("--major", type=int, help="Also require this major version.")
@click.option(
    "--case-sensitive/--ignore-case",
    default=None,
    help="Compare names with or without regard to case.",
)
@click.option("--loose", is_flag=True, help="Treat missing minor/revision values as 0.")
@pass_context
def contains(
    ctx: Context,
    haystack: str,
    needle: str,
    major: Optional[int],
    case_sensitive: Optional[bool],
    loose: bool,
) -> None:
    """Check whether the named versions in HAYSTACK contain NEEDLE.

    NEEDLE is either a named version ("LibA 1.0", "LibA 1.0 + LibB 2.0") or
    just a name; with --major it is always treated as a name. Names are
    matched ignoring case unless --case-sensitive is given. Prints "true"
    or "false" and exits 1 when not contained.
    """
    config = ctx.load_config()
    if case_sensitive is None:
        case_sensitive = config.case_sensitive

    try:
        versions = _parse(haystack, named=True)
    except InvalidVersionError as e:
        echo_error(e.message)
        sys.exit(1)

    wanted = NamedVersion.parse(needle) if major is None else None
    if wanted is None:
        found = versions.contains(needle, major, case_sensitive=case_sensitive)
    elif case_sensitive:
        found = _contains_exact_names(versions, wanted, loose)
    elif loose:
        found = versions.loosely_contains(wanted)
    else:
        found = versions.contains(wanted)

    click.echo("true" if found else "false")
    if not found:
        sys.exit(1)


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()
    except ConfigError as e:
        echo_error(str(e))
        sys.exit(1)
    except FileNotFoundError as e:
        echo_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
