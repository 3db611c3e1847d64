"""
Cattata - Discord Activity Tracker

Cattata records when each member of a server last spoke, periodically looks
for members who hold a watched role but have gone quiet, and reports both the
inactive members and the full activity table as paginated embeds.

Core Components:

- **Activity Ledger**: SQLite-backed ``user_id -> last activity`` store with
  idempotent upserts serialised through a single writer
- **Inactivity Evaluator**: Selects role holders whose last recorded activity
  is older than the configured threshold
- **Report Paginator**: Packs report lines into length-bounded embed pages and
  groups them into batches of at most ten embeds per message
- **Inactivity Scheduler**: Re-runs the evaluation on a fixed interval and
  posts the result to a report channel when one is configured

Usage:
    from cattata.main import main
    main()  # Starts the bot
"""
