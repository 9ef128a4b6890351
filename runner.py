from __future__ import annotations

"""Repo-root convenience shim for running the simulator from a checkout.

    python runner.py simulate examples/website.yaml -n 2

It delegates to the canonical entry point:

    python -m schedlab
"""

import sys


def main() -> int:
    """Run the schedlab CLI with this process's arguments."""

    from schedlab.cli import main as cli_main

    return cli_main(sys.argv[1:])


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
