"""
Utility functions and helpers for Cattata.

This package provides reusable utilities:

- **logger.py**: Centralized logging configuration with colored console output,
  rotating file handlers, and per-session log aggregation. Suppresses noise from
  Discord and database internals. Uses prompt_toolkit for console output.

- **format_utils.py**: Epoch-millisecond clock helpers and the human-readable
  "last active" rendering shared by every report.
"""
