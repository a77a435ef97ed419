from __future__ import annotations

import httpx
from rich.console import Console
from rich.text import Text


def status_color(status_code: int) -> str:
    """Return a rich color name based on HTTP status category."""
    if status_code < 200:
        return "cyan"
    elif status_code < 300:
        return "green"
    elif status_code < 400:
        return "yellow"
    elif status_code < 500:
        return "red"
    else:
        return "bold red"


def format_head_plain(response: httpx.Response) -> str:
    status_line = (
        f"{response.http_version} {response.status_code} {response.reason_phrase}"
    ).rstrip()
    lines: list[str] = [status_line]

    for key, value in response.headers.multi_items():
        lines.append(f"{key}: {value}")

    lines.append("")
    return "\n".join(lines)


def print_head_rich(console: Console, response: httpx.Response) -> None:
    """Pretty-print the status line and headers using rich."""
    color = status_color(response.status_code)

    status_line = Text()
    status_line.append(f"{response.http_version} ", style="bold dim")
    status_line.append(f"{response.status_code}", style=f"bold {color}")
    if response.reason_phrase:
        status_line.append(f" {response.reason_phrase}", style=color)
    console.print(status_line)

    for key, value in response.headers.multi_items():
        header_text = Text()
        header_text.append(f"{key}", style="dim cyan")
        header_text.append(": ", style="dim")
        header_text.append(value)
        console.print(header_text)

    console.print()
