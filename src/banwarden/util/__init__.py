"""
Shared utilities.

- **logger.py**: Per-module loggers with coloured prompt_toolkit console output
  and a per-session rotating log file.
- **matrix_glob.py**: Whole-string ``*``/``?`` glob matcher for user ids and
  ban reasons.
"""
