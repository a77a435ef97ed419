"""
Programmatic Fetch
==================

Demonstrates driving the dispatcher without the CLI: build a RequestSpec
from an argument list, print the head with the plain formatter and copy
the body to stdout.
"""

import sys

import fetchr


def main() -> None:
    # ── Parse arguments the same way the CLI does ────────────────────────
    spec = fetchr.RequestSpec.from_args(
        ["post", "https://httpbin.org/post", fetchr.PRINT_BODY_FLAG]
    )
    print(f"Method: {spec.method.value}  URL: {spec.url}  Body: {spec.print_body}")
    print()

    # ── Send it ──────────────────────────────────────────────────────────
    try:
        fetchr.dispatch(
            spec,
            show_head=lambda response: print(fetchr.format_head_plain(response), flush=True),
            body_out=sys.stdout.buffer,
        )
    except fetchr.FetchError as exc:
        print(f"{type(exc).__name__}: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
