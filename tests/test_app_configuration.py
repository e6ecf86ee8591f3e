import json
import logging
from pathlib import Path

import pytest

from banwarden.configuration.app_configuration import AppConfig
from banwarden.datatypes.reconcile_config import DEFAULT_AUTOMATIC_REDACT_PATTERNS


@pytest.fixture()
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "app_config.yml"


def test_app_config_reload_parses_yaml(config_path: Path) -> None:
    config_path.write_text(
        "\n".join(
            [
                "noop: true",
                "faster_membership_checks: yes",
                "automatically_redact_for_reasons: ['spam', 'crypto*']",
                "management_room: '!mgmt:a.org'",
                "log_level: warning",
                "protected_rooms: ['!r1:a.org', '!r2:a.org']",
                "ban_sync:",
                "  interval_seconds: 30",
                "redaction_queue:",
                "  max_size: 5",
                "homeserver_url: https://matrix.a.org",
                "access_token: secret",
            ]
        ),
        encoding="utf-8",
    )

    config = AppConfig(config_path)

    assert config.noop is True
    assert config.faster_membership_checks is True
    assert config.automatic_redact_patterns == ["spam", "crypto*"]
    assert config.management_room == "!mgmt:a.org"
    assert config.log_level == logging.WARNING
    assert config.protected_rooms == ["!r1:a.org", "!r2:a.org"]
    assert config.ban_sync_interval == pytest.approx(30.0)
    assert config.redaction_queue_size == 5
    assert config.homeserver_url == "https://matrix.a.org"
    assert config.access_token == "secret"

    reconcile = config.reconcile_config
    assert reconcile.noop is True
    assert reconcile.faster_membership_checks is True
    assert reconcile.should_redact_for("Crypto giveaway")


def test_app_config_accepts_legacy_camel_case_keys(config_path: Path) -> None:
    payload = {
        "fasterMembershipChecks": True,
        "automaticallyRedactForReasons": ["advert*"],
        "managementRoom": "!legacy:a.org",
        "protectedRooms": ["!old:a.org"],
        "logLevel": "DEBUG",
    }
    config_path.write_text(json.dumps(payload), encoding="utf-8")

    config = AppConfig(config_path)

    assert config.faster_membership_checks is True
    assert config.automatic_redact_patterns == ["advert*"]
    assert config.management_room == "!legacy:a.org"
    assert config.protected_rooms == ["!old:a.org"]
    assert config.log_level == logging.DEBUG


def test_app_config_missing_file_returns_defaults(tmp_path: Path) -> None:
    config = AppConfig(tmp_path / "does_not_exist.yml")

    assert config.data == {}
    assert config.noop is False
    assert config.faster_membership_checks is False
    assert config.automatic_redact_patterns == list(DEFAULT_AUTOMATIC_REDACT_PATTERNS)
    assert config.management_room is None
    assert config.log_level == logging.INFO
    assert config.protected_rooms == []
    assert config.ban_sync_interval == pytest.approx(600.0)
    assert config.redaction_queue_size == 1000
    assert config.homeserver_url is None


def test_app_config_non_mapping_is_ignored(config_path: Path) -> None:
    config_path.write_text("- just\n- a list\n", encoding="utf-8")

    assert AppConfig(config_path).data == {}


def test_app_config_malformed_yaml_is_ignored(config_path: Path) -> None:
    config_path.write_text("noop: [unclosed", encoding="utf-8")

    assert AppConfig(config_path).data == {}


def test_explicit_empty_redact_list_disables_redaction(config_path: Path) -> None:
    config_path.write_text("automatically_redact_for_reasons: []\n", encoding="utf-8")

    config = AppConfig(config_path)

    assert config.automatic_redact_patterns == []
    assert not config.reconcile_config.should_redact_for("spam")


def test_invalid_values_fall_back(config_path: Path) -> None:
    config_path.write_text(
        "automatically_redact_for_reasons: spam\nlog_level: LOUD\nprotected_rooms: '!r'\nban_sync: 5\n",
        encoding="utf-8",
    )

    config = AppConfig(config_path)

    assert config.automatic_redact_patterns == list(DEFAULT_AUTOMATIC_REDACT_PATTERNS)
    assert config.log_level == logging.INFO
    assert config.protected_rooms == []
    assert config.ban_sync_interval == pytest.approx(600.0)


def test_reload_picks_up_changes(config_path: Path) -> None:
    config_path.write_text("noop: false\n", encoding="utf-8")
    config = AppConfig(config_path)
    assert config.noop is False

    config_path.write_text("noop: true\n", encoding="utf-8")
    data = config.reload()

    assert data == {"noop": True}
    assert config.get("noop") is True
    assert config.noop is True


def test_non_numeric_sync_and_queue_settings_fall_back(config_path: Path) -> None:
    config_path.write_text(
        "ban_sync:\n  interval_seconds: null\nredaction_queue:\n  max_size: lots\n",
        encoding="utf-8",
    )

    config = AppConfig(config_path)

    assert config.ban_sync_interval == pytest.approx(600.0)
    assert config.redaction_queue_size == 1000


def test_importing_module_does_not_read_config(monkeypatch: pytest.MonkeyPatch) -> None:
    from banwarden.configuration import app_configuration

    assert not hasattr(app_configuration, "app_config")

    monkeypatch.setattr(app_configuration.AppConfig, "load_from_disk", lambda self: {"noop": True})
    config = app_configuration.AppConfig()

    assert config.config_path == app_configuration.CONFIG_PATH
    assert config.noop is True
