"""CLI adapter for ``lib_failure_message`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators confirm an installation and watch the interception protocol work
without writing a test module.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_check` – asserts a message against an expected substring.
* :func:`cli_selftest` – runs the reference scenarios, including two
  concurrent assertions.
* :func:`cli_fail` – raises the deterministic reference failure.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It calls the composition root
(:func:`assert_failure_message`) and never reaches into adapters directly.
``lib_cli_exit_tools`` centralises the exit code strategy.
"""

from __future__ import annotations

import sys
from concurrent.futures import ThreadPoolExecutor
from importlib import metadata
from threading import Barrier
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .core import assert_failure_message
from .domain.errors import CallbackDidNotFailError, MessageMismatchError
from .testing import REFERENCE_MESSAGE, i_should_fail, raising

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000
_DISTRIBUTION: Final[str] = "lib_failure_message"


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when not installed."""

    try:
        return metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Assert on the text of failures raised by callables",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name=_DISTRIBUTION,
    message="lib_failure_message version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        click.echo("lib_failure_message (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', _DISTRIBUTION)}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")
    for entry in meta.get_all("Project-URL") or []:
        click.echo(f"  {entry}")


@cli.command("check", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--message", required=True, help="Message the callable raises (as RuntimeError)")
@click.option("--expected", required=True, help="Substring the captured text must contain")
def cli_check(message: str, expected: str) -> None:
    """Raise *message* inside a callable and assert it contains *expected*.

    Exits with ``0`` and prints ``match`` when the substring is found; otherwise
    the mismatch diagnostic is reported through ``lib_cli_exit_tools``.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> result = CliRunner().invoke(cli, ["check", "--message", "disk full", "--expected", "full"])
    >>> result.output.strip()
    'match'
    """

    assert_failure_message(raising(message), expected)
    click.echo("match")


@cli.command("selftest", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_selftest() -> None:
    """Run the reference scenarios and print one status line per scenario."""

    outcomes = [
        ("mismatch-reported", _scenario_mismatch),
        ("match-passes", _scenario_match),
        ("no-failure-reported", _scenario_no_failure),
        ("concurrent-isolation", _scenario_concurrent),
    ]
    broken = 0
    for name, scenario in outcomes:
        ok = scenario()
        broken += 0 if ok else 1
        click.echo(f"{'ok  ' if ok else 'FAIL'} {name}")
    if broken:
        raise SystemExit(1)


@cli.command("fail", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_fail() -> None:
    """Trigger a deterministic error for testing traceback handling."""

    i_should_fail()


def _scenario_mismatch() -> bool:
    try:
        assert_failure_message(raising("SOMETHING_DIFFERENT"), REFERENCE_MESSAGE)
    except MessageMismatchError as exc:
        text = str(exc)
        return "SOMETHING_DIFFERENT" in text and REFERENCE_MESSAGE in text
    return False


def _scenario_match() -> bool:
    try:
        assert_failure_message(raising(REFERENCE_MESSAGE), REFERENCE_MESSAGE)
    except MessageMismatchError:
        return False
    return True


def _scenario_no_failure() -> bool:
    try:
        assert_failure_message(lambda: None, REFERENCE_MESSAGE)
    except CallbackDidNotFailError:
        return True
    return False


def _scenario_concurrent() -> bool:
    barrier = Barrier(2)

    def _assert(message: str) -> bool:
        barrier.wait()
        try:
            assert_failure_message(raising(message), message)
        except MessageMismatchError:
            return False
        return True

    with ThreadPoolExecutor(max_workers=2) as pool:
        results = list(pool.map(_assert, ["first concurrent failure", "second concurrent failure"]))
    return all(results)


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=_DISTRIBUTION,
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
