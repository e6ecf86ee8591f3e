"""
Assembly of a running warden from the application configuration.

The host application supplies where ban lists come from and how a user's
messages are redacted; everything else (client, management log, engine,
redaction queue, periodic sync) is built from ``AppConfig``.
"""

from __future__ import annotations

from typing import Sequence

from banwarden.client.chat_client import ChatClient
from banwarden.client.mautrix_client import MautrixChatClient
from banwarden.configuration.app_configuration import AppConfig
from banwarden.moderation.ban_policy_engine import BanPolicyEngine
from banwarden.moderation.error_cache import ErrorCache
from banwarden.moderation.management_log import ManagementLog
from banwarden.scheduler.ban_sync_scheduler import BanSyncScheduler, ListsProvider
from banwarden.scheduler.redaction_queue import RedactionHandler, RedactionQueue
from banwarden.util.logger import get_logger

logger = get_logger("warden")


class Warden:
    """
    Owns the long-lived components and their lifecycle.

    Attributes:
        client: Chat-service client shared by every component.
        log: Management log used for operator messages.
        engine: Reconciliation engine.
        redaction_queue: Queue of automatic redaction jobs.
        scheduler: Periodic reconciliation driver.

    A client created by the warden itself (``owns_client``) is closed on
    shutdown; a caller-supplied client is left open.
    """

    def __init__(
        self,
        config: AppConfig,
        client: ChatClient,
        get_lists: ListsProvider,
        redaction_handler: RedactionHandler,
        owns_client: bool = False,
    ) -> None:
        self._config = config
        self.client = client
        self._owns_client = owns_client
        self.log = ManagementLog(client, config.management_room, notice_level=config.log_level)
        self.redaction_queue = RedactionQueue(redaction_handler, max_size=config.redaction_queue_size)
        self.engine = BanPolicyEngine(client, config.reconcile_config, log=self.log, redaction=self.redaction_queue)
        self.scheduler = BanSyncScheduler(
            self.engine,
            get_lists,
            self._protected_rooms,
            lambda: config.ban_sync_interval,
            self.log,
            ErrorCache(),
        )

    async def _protected_rooms(self) -> Sequence[str]:
        return self._config.protected_rooms

    def start(self) -> None:
        if self._config.noop:
            logger.warning("[WARDEN] Running in no-op mode: no bans or unbans will be issued")
        self.redaction_queue.start()
        self.scheduler.start()

    async def shutdown(self) -> None:
        await self.scheduler.shutdown()
        await self.redaction_queue.shutdown()
        if self._owns_client:
            await self.client.close()


def create_warden(
    config: AppConfig,
    get_lists: ListsProvider,
    redaction_handler: RedactionHandler,
    client: ChatClient | None = None,
) -> Warden:
    """Build a warden, connecting to the configured homeserver if no client is given.

    Raises:
        ValueError: If no client is given and the homeserver url or access token is missing.
    """
    if client is None:
        if not config.homeserver_url or not config.access_token:
            raise ValueError("homeserver_url and access_token must be configured")
        mautrix_client = MautrixChatClient.connect(config.homeserver_url, config.access_token)
        return Warden(config, mautrix_client, get_lists, redaction_handler, owns_client=True)
    return Warden(config, client, get_lists, redaction_handler)
