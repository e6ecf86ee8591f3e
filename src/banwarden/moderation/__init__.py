"""
Ban-policy reconciliation core.

- **ban_policy_engine.py**: ``find_decision`` (first applicable rule wins),
  ``BanPolicyEngine`` and the ``apply_ban_policies`` entry point.
- **action_executor.py**: Issues ban/unban calls, honours no-op mode and
  queues automatic redactions for matching ban reasons.
- **error_classifier.py**: Extracts messages from failures and classifies them
  as permission or fatal errors, one per room.
- **error_cache.py**: Throttles repeated alerts for the same room error.
- **management_log.py**: Logs operator messages locally and mirrors them to a
  management room.
"""
