"""
banwarden - Ban-list reconciliation for Matrix rooms

banwarden keeps the membership of a set of protected rooms in line with one or
more moderation ban lists.

Core Components:

- **Ban lists**: Ordered collections of user rules (ban or unban a user-id
  glob, with a reason). Earlier lists and earlier rules take priority.
- **Reconciliation engine**: For every member of every room, the first
  applicable rule decides whether to ban, unban or leave the user alone.
  Already-converged users are skipped, so passes are idempotent.
- **Action execution**: Issues ban/unban calls (or only logs them in no-op
  mode) and queues message redaction for bans whose reason matches a
  configured pattern.
- **Error report**: Each room either succeeds silently or yields one error,
  classified as a permission problem or a fatal failure; one broken room
  never stops the others.
- **Scheduling**: Periodic passes over the protected rooms with throttled
  error alerts in a management room.

Usage:
    from banwarden.moderation.ban_policy_engine import apply_ban_policies
    errors = await apply_ban_policies(lists, room_ids, client=client, config=config)
"""
