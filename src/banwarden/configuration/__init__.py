"""
Configuration management for banwarden.

- **app_configuration.py**: File-locked YAML configuration loader for global
  settings: no-op mode, membership retrieval strategy, automatic-redaction
  reason patterns, management room and its log threshold, protected rooms,
  sync interval, redaction queue size and homeserver credentials. Falls back
  gracefully on missing or malformed config files.
"""
