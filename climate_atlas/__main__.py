# FILE: climate_atlas/__main__.py
# =============================================================================
# Climate Atlas
# Package entrypoint, enables `python -m climate_atlas` to launch the CLI.
#
#     python -m climate_atlas --help
#     python -m climate_atlas month -c configs/atlas.yaml January
#
# Kept thin; config resolution and logging live in `climate_atlas.cli`.
# =============================================================================

from __future__ import annotations

import sys


def _run() -> int:
    """
    Import and invoke the Typer CLI entrypoint.

    Returns
    -------
    int
        Process exit code (0 on success).
    """
    # Import here so that CLI-only dependencies (Typer, rich) are not required
    # just to import the package elsewhere.
    from climate_atlas.cli import main as _cli_main

    _cli_main()
    return 0


if __name__ == "__main__":
    sys.exit(_run())
