# =============================================================================
# src/cli/__main__.py - Package Entry Point
# =============================================================================
#
# `python -m src.cli` runs the sync command, the CLI's main job.  For the
# progress audit run `python -m src.cli.check_progress` directly.
# =============================================================================

"""Allow ``python -m src.cli`` execution."""

from src.cli.sync import main

main()
