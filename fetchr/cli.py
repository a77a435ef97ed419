from __future__ import annotations

import logging
import sys
import typing

import click
import httpx
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ._dispatch import build_client, dispatch
from ._exceptions import FetchError
from ._models import PRINT_BODY_FLAG, RequestSpec
from ._output import format_head_plain, print_head_rich


def configure_logging(verbose: bool) -> None:
    """Send fetchr and httpx debug logs to stderr when verbose."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def head_printer(use_rich: bool) -> typing.Callable[[httpx.Response], None]:
    if use_rich:
        console = Console()

        def show_head(response: httpx.Response) -> None:
            print_head_rich(console, response)
            console.file.flush()

    else:

        def show_head(response: httpx.Response) -> None:
            click.echo(format_head_plain(response))

    return show_head


def body_stream() -> typing.BinaryIO:
    return sys.stdout.buffer


def report_error(exc: FetchError, use_rich: bool) -> None:
    if use_rich:
        console = Console(stderr=True)
        console.print(f"[bold red]{type(exc).__name__}[/bold red]: {escape(str(exc))}")
    else:
        click.echo(f"{type(exc).__name__}: {exc}", err=True)


@click.command(
    help=(
        "Fetch a URL with a single GET or POST request.\n\n"
        "METHOD is 'post' (any case) for POST, anything else means GET. "
        f"Pass {PRINT_BODY_FLAG} as the third argument to print the body. "
        "Options must come before METHOD."
    ),
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    },
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose output.")
@click.option(
    "--follow-redirects/--no-follow-redirects",
    default=True,
    help="Follow redirects.",
)
@click.option(
    "--no-color", is_flag=True, default=False, help="Disable colored output."
)
def main(
    args: tuple[str, ...],
    verbose: bool,
    follow_redirects: bool,
    no_color: bool,
) -> None:
    configure_logging(verbose)
    use_rich = not no_color and sys.stdout.isatty()

    spec = RequestSpec.from_args(args)
    if spec.url_defaulted:
        click.echo("No CLI URL provided, using default.", err=True)
    click.echo(f'Fetching "{spec.url}"...', err=True)

    try:
        with build_client(follow_redirects=follow_redirects) as client:
            dispatch(
                spec,
                show_head=head_printer(use_rich),
                body_out=body_stream(),
                client=client,
            )
    except FetchError as exc:
        report_error(exc, use_rich)
        sys.exit(1)
