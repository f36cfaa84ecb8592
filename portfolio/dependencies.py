"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging
import threading

from portfolio.config import get_settings
from portfolio.db import DbClient, InMemoryDbClient, SqlDbClient
from portfolio.mail import InMemoryMailClient, MailClient, SmtpMailClient

logger = logging.getLogger(__name__)

_db_client: DbClient | None = None
_mail_client: MailClient | None = None
# sync dependencies run in the threadpool; first requests may race
_init_lock = threading.Lock()


def get_db_client() -> DbClient:
    """
    Return a singleton record store so the engine and its pool are shared across requests.
    """
    global _db_client
    if _db_client:
        return _db_client

    with _init_lock:
        if _db_client:
            return _db_client
        settings = get_settings()
        if settings.use_in_memory_backends or not settings.database_url:
            logger.warning("No DATABASE_URL configured, records are kept in memory")
            _db_client = InMemoryDbClient()
        else:
            _db_client = SqlDbClient(settings.database_url)
            logger.info("Record store configured")
    return _db_client


def get_mail_client() -> MailClient:
    global _mail_client
    if _mail_client:
        return _mail_client

    with _init_lock:
        if _mail_client:
            return _mail_client
        settings = get_settings()
        if settings.use_in_memory_backends or not (
            settings.mail_username and settings.mail_password
        ):
            logger.warning("No mail credentials configured, emails are not delivered")
            _mail_client = InMemoryMailClient()
        else:
            _mail_client = SmtpMailClient(
                host=settings.mail_host,
                port=settings.mail_port,
                username=settings.mail_username,
                password=settings.mail_password,
            )
    return _mail_client
