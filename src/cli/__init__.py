# =============================================================================
# src/cli/__init__.py - CLI Module Overview
# =============================================================================
#
# Standalone command-line tools, each runnable via `python -m src.cli.<module>`:
#
#   1. SYNC (sync.py)
#      Scrapes the achievement wiki page into achievements_v<version>.json
#      and updates index.json.  Also the default for `python -m src.cli`.
#
#   2. CHECK PROGRESS (check_progress.py)
#      Validates a progress export from the browser checklist and reports
#      progress entries whose item ids no longer exist in a catalog.
#
# Architecture Notes:
#   - argparse for argument parsing (not Click/Typer).
#   - Each module builds its own dependencies through src.main; CLI tools
#     run as one-shot scripts, not long-lived servers.
#   - `run(argv)` returns an exit code so tests can drive the CLI directly.
# =============================================================================

"""CLI tools for the achievement catalog sync.

- ``python -m src.cli.sync`` - scrape the wiki into a versioned catalog.
- ``python -m src.cli.check_progress`` - audit a progress export against
  a catalog.
"""
