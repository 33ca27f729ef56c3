import asyncio
import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any, Optional, cast

import click
import yaml  # type: ignore
from dotenv import load_dotenv

from pagenav.config import load_options
from pagenav.json_utils import json_dumps
from pagenav.navigation import (
    MemoryScrollSpy,
    NavigationError,
    NavigationOptions,
    ScrollSpyCoordinator,
)
from pagenav.outline import load_outline, register_outline
from pagenav.snapshot import snapshot

try:
    __version__ = version("pagenav")
except PackageNotFoundError:
    __version__ = "0.0.1-dev"

# Event kinds accepted by ``simulate``.
EVENT_KINDS = ("click", "centered", "remove", "scroll", "uri")


@click.group()
@click.option("--debug/--no-debug", default=False)
@click.option("--trace/--no-trace", default=False)
@click.option(
    "--log-file",
    type=click.Path(file_okay=True, dir_okay=False),
    envvar="PAGENAV_LOG_FILE",
)
@click.version_option(__version__, prog_name="pagenav")
def cli(debug: bool, trace: bool, log_file: Optional[str] = None) -> None:
    """Configure logging and load environment variables.

    Args:
        debug: Toggle debug logging.
        trace: Toggle trace logging.
        log_file: Optional path to the log file.
    """
    if trace:
        level = 1
    elif debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        filename=log_file,
        level=level,
        format="[%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if trace:
        logging.debug("Trace mode is on")
    if debug:
        logging.debug("Debug mode is on")
    load_dotenv()


def _options(
    config: Optional[str], activate_first: Optional[bool] = None
) -> NavigationOptions:
    """Load options, turning configuration errors into click errors."""

    try:
        options = load_options(config)
    except (OSError, ValueError) as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc

    if activate_first is not None:
        options.activate_first_as_default = activate_first
    return options


def _parse_event(raw: str) -> tuple[str, str]:
    """Split an event such as ``click:intro`` into kind and target."""

    kind, sep, target = raw.partition(":")
    if not sep or kind not in EVENT_KINDS or not target:
        raise click.UsageError(
            f"Invalid event {raw!r}; expected one of "
            f"{', '.join(k + ':ID' for k in EVENT_KINDS)}"
        )
    return kind, target


config_option = click.option(
    "--config",
    type=click.Path(exists=True, file_okay=True, dir_okay=False),
    default=None,
    help="Navigation options file (YAML or JSON).",
)


@cli.command()
@click.argument(
    "outline_file",
    type=click.Path(exists=True, file_okay=True, dir_okay=False),
)
@config_option
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"]),
    default="json",
    help="Output format.",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(file_okay=True, dir_okay=False),
    default=None,
    help="Write output to FILE instead of the console.",
)
def outline(
    outline_file: str,
    config: Optional[str] = None,
    output_format: str = "json",
    output_path: Optional[str] = None,
) -> None:
    """Register an outline and print the resulting navigation.

    Args:
        outline_file: YAML or JSON file with a ``sections`` list.
        config: Optional navigation options file.
        output_format: Format of the printed navigation.
        output_path: Optional file receiving the output.
    """

    navigation = ScrollSpyCoordinator(MemoryScrollSpy, _options(config))
    try:
        register_outline(navigation, load_outline(Path(outline_file)))
    except (NavigationError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc

    data = snapshot(navigation)
    if output_format == "json":
        content = json_dumps(data, indent=True)
    else:
        content = yaml.safe_dump(data, allow_unicode=True, sort_keys=False)

    if output_path:
        Path(output_path).write_text(content, encoding="utf-8")
    else:
        click.echo(content)


async def _replay(
    navigation: ScrollSpyCoordinator,
    entries: list[dict[str, Any]],
    events: list[tuple[str, str]],
) -> list[Optional[str]]:
    """Attach ``navigation``, replay ``events`` and collect active ids."""

    history: list[Optional[str]] = []

    def record() -> None:
        active = navigation.active_section
        history.append(active.section_id if active else None)

    async with navigation:
        register_outline(navigation, entries)
        await navigation.settle()
        record()

        spy = cast(MemoryScrollSpy, navigation.scroll_spy)
        for kind, target in events:
            if kind == "click":
                await navigation.click(target)
            elif kind == "centered":
                spy.center(target)
            elif kind == "scroll":
                await navigation.scroll_to_section(target)
            elif kind == "uri":
                await navigation.scroll_to_uri(target)
            else:
                navigation.remove_section(target)
            record()

    return history


@cli.command()
@click.argument(
    "outline_file",
    type=click.Path(exists=True, file_okay=True, dir_okay=False),
)
@click.argument("events", nargs=-1)
@config_option
@click.option(
    "--activate-first/--no-activate-first",
    default=None,
    help="Override activate_first_as_default from the options.",
)
def simulate(
    outline_file: str,
    events: tuple[str, ...],
    config: Optional[str] = None,
    activate_first: Optional[bool] = None,
) -> None:
    """Replay navigation events and print the active section after each.

    Events are written as ``click:ID``, ``centered:ID``, ``scroll:ID``,
    ``uri:URI`` or ``remove:ID``.
    """

    parsed = [_parse_event(raw) for raw in events]
    navigation = ScrollSpyCoordinator(
        MemoryScrollSpy, _options(config, activate_first)
    )

    try:
        entries = load_outline(Path(outline_file))
        history = asyncio.run(_replay(navigation, entries, parsed))
    except (NavigationError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc

    labels = ["start"] + [f"{kind}:{target}" for kind, target in parsed]
    for label, active in zip(labels, history):
        click.echo(f"{label}\t{active or '-'}")
