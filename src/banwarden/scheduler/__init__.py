"""
Background tasks around the reconciliation core.

- **ban_sync_scheduler.py**: Runs a reconciliation pass over the protected
  rooms on a fixed interval and reports room errors, throttled per room and
  error kind.

- **redaction_queue.py**: Bounded fire-and-forget queue of redaction jobs
  triggered by bans whose reason matches an automatic-redaction pattern.
  Drained by a single worker; enqueueing never blocks.

Both expose ``start()`` / ``shutdown()`` and can be shut down repeatedly.
"""
