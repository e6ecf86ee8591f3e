from __future__ import annotations
from pathlib import Path
import fcntl
import logging
from typing import Any, Callable, Dict, List
import yaml

from banwarden.datatypes.reconcile_config import DEFAULT_AUTOMATIC_REDACT_PATTERNS, ReconcileConfig
from banwarden.util.logger import get_logger

logger = get_logger("app_configuration")


CONFIG_PATH = Path("./config/app_config.yml").resolve()


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _as_number(value: Any, cast: Callable[[Any], Any], default: Any, key: str) -> Any:
    try:
        return cast(value)
    except (TypeError, ValueError):
        logger.warning("[APP CONFIGURATION] %s must be a number; using default %s.", key, default)
        return default


class AppConfig:
    """File-lock based accessor around the YAML-based warden configuration.

    The class caches contents of ``./config/app_config.yml`` and exposes
    dictionary-like access helpers plus typed properties. Keys are read in
    snake_case first; the camelCase spelling used by older deployments is
    accepted as a fallback. Uses fcntl file locks for safe concurrent access
    across processes.
    """

    def __init__(self, config_path: Path = CONFIG_PATH) -> None:
        self.config_path = config_path
        self._data: Dict[str, Any] = {}
        self.reload()

    # --------------------------
    # Private helpers
    # --------------------------
    def load_from_disk(self) -> Dict[str, Any]:
        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_SH)
                try:
                    data = yaml.safe_load(f)
                finally:
                    fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except FileNotFoundError:
            logger.error("[APP CONFIGURATION] Config file %s not found.", self.config_path)
            return {}
        except Exception as exc:
            logger.error("[APP CONFIGURATION] Failed to load config %s: %s", self.config_path, exc)
            return {}

        if not isinstance(data, dict):
            if data is not None:
                logger.error("[APP CONFIGURATION] Config %s is not a mapping; ignoring it.", self.config_path)
            return {}
        return data

    def _lookup(self, key: str, legacy_key: str | None = None, default: Any = None) -> Any:
        if key in self._data:
            return self._data[key]
        if legacy_key and legacy_key in self._data:
            return self._data[legacy_key]
        return default

    def _section(self, key: str) -> Dict[str, Any]:
        section = self._data.get(key, {})
        return section if isinstance(section, dict) else {}

    # --------------------------
    # Public API
    # --------------------------
    def reload(self) -> Dict[str, Any]:
        """Reload configuration from disk and return the loaded mapping.

        Returns the raw mapping that was loaded (an empty dict on error).
        """
        self._data = self.load_from_disk()
        return self._data

    @property
    def data(self) -> Dict[str, Any]:
        """Return the current cached configuration mapping (do not mutate)."""
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        """Safe lookup for top-level configuration keys."""
        return self._data.get(key, default)

    # --------------------------
    # High-level shortcuts
    # --------------------------
    @property
    def noop(self) -> bool:
        return _as_bool(self._lookup("noop", default=False))

    @property
    def faster_membership_checks(self) -> bool:
        return _as_bool(self._lookup("faster_membership_checks", "fasterMembershipChecks", False))

    @property
    def automatic_redact_patterns(self) -> List[str]:
        """Return the ban-reason globs that trigger automatic redaction.

        A missing key yields the defaults; an explicit empty list disables
        automatic redaction.
        """
        value = self._lookup(
            "automatically_redact_for_reasons",
            "automaticallyRedactForReasons",
            list(DEFAULT_AUTOMATIC_REDACT_PATTERNS),
        )
        if not isinstance(value, list):
            logger.warning("[APP CONFIGURATION] automatically_redact_for_reasons must be a list; using defaults.")
            return list(DEFAULT_AUTOMATIC_REDACT_PATTERNS)
        return [str(v) for v in value if v is not None]

    @property
    def reconcile_config(self) -> ReconcileConfig:
        """Return the immutable settings handed to the reconciliation engine."""
        return ReconcileConfig.build(
            noop=self.noop,
            faster_membership_checks=self.faster_membership_checks,
            automatic_redact_patterns=self.automatic_redact_patterns,
        )

    @property
    def management_room(self) -> str | None:
        value = self._lookup("management_room", "managementRoom")
        return str(value) if value else None

    @property
    def log_level(self) -> int:
        """Return the minimum level mirrored to the management room (default INFO)."""
        value = self._lookup("log_level", "logLevel", "INFO")
        level = logging.getLevelName(str(value).upper())
        return level if isinstance(level, int) else logging.INFO

    @property
    def protected_rooms(self) -> List[str]:
        value = self._lookup("protected_rooms", "protectedRooms", [])
        return [str(v) for v in value] if isinstance(value, list) else []

    @property
    def ban_sync_interval(self) -> float:
        """Return the reconciliation interval in seconds (default 600)."""
        value = self._section("ban_sync").get("interval_seconds", 600.0)
        return _as_number(value, float, 600.0, "ban_sync.interval_seconds")

    @property
    def redaction_queue_size(self) -> int:
        value = self._section("redaction_queue").get("max_size", 1000)
        return _as_number(value, int, 1000, "redaction_queue.max_size")

    @property
    def homeserver_url(self) -> str | None:
        value = self._lookup("homeserver_url", "homeserverUrl")
        return str(value) if value else None

    @property
    def access_token(self) -> str | None:
        value = self._lookup("access_token", "accessToken")
        return str(value) if value else None

