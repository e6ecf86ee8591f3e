"""
Chat-service collaborators.

- **chat_client.py**: ``ChatClient``, ``RedactionSink`` and ``ModerationLogger``
  protocols consumed by the reconciliation core.
- **mautrix_client.py**: ``MautrixChatClient``, the Matrix implementation of
  ``ChatClient`` built on mautrix.
"""
