"""
Configuration management for Cattata.

- **app_configuration.py**: File-locked YAML configuration loader for global
  settings. Provides the watched role, the evaluated guild, the inactivity
  threshold and check interval, the scheduled report channel, report page
  limits and footer, the legacy text command triggers, and the database path.
  Falls back to defaults on missing or malformed config files.
"""
