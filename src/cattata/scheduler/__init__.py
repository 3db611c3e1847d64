"""
Scheduled task execution for Cattata.

- **inactivity_scheduler.py**: Fixed-interval runner for the inactivity check.
  Starts once after the Discord connection is ready, never runs two checks
  at the same time, and keeps firing after a failed tick.
"""
