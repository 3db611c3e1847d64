"""
Service layer for Cattata.

- **activity_ledger.py**: Durable last-activity store with idempotent upserts.
- **inactivity_evaluator.py**: Selects watched-role holders who have gone quiet.
- **membership.py**: Builds member snapshots from a Discord guild.
- **report_service.py**: Joins ledger, evaluator and paginator into reports.
- **notification_service.py**: Posts scheduled results to a report channel.
"""
