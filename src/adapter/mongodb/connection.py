"""Shared MongoClient for the repositories and the health check."""

import os
import logging
from pymongo import MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

logging.getLogger('pymongo').setLevel(logging.WARNING)

MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'weather_notify')
MONGO_TIMEOUT_MS = int(os.getenv('MONGO_TIMEOUT_MS', '5000'))
MONGO_POOL_SIZE = int(os.getenv('MONGO_POOL_SIZE', '10'))

_client: MongoClient | None = None
_warned_unconfigured = False


def reset_client():
    """Close and forget the cached client."""
    global _client, _warned_unconfigured
    if _client is not None:
        _client.close()
    _client = None
    _warned_unconfigured = False


def _connect() -> MongoClient:
    client = MongoClient(
        MONGO_URL,
        appname='weather-notify',
        serverSelectionTimeoutMS=MONGO_TIMEOUT_MS,
        connectTimeoutMS=MONGO_TIMEOUT_MS,
        socketTimeoutMS=MONGO_TIMEOUT_MS * 6,
        maxPoolSize=MONGO_POOL_SIZE,
        retryWrites=True,
        retryReads=True,
    )
    try:
        client.admin.command('ping')
    except PyMongoError:
        client.close()
        raise
    return client


def _alive(client: MongoClient) -> bool:
    try:
        client.admin.command('ping')
        return True
    except PyMongoError:
        return False


def get_mongodb_client() -> MongoClient | None:
    """Return a live MongoClient, or None when MongoDB can't be reached.

    A missing MONGO_URL is reported once. Connection failures are logged and
    retried on the next call, so the service recovers once MongoDB is back.
    """
    global _client, _warned_unconfigured

    if not MONGO_URL:
        if not _warned_unconfigured:
            logger.error("[MONGODB] MONGO_URL not configured")
            _warned_unconfigured = True
        return None

    if _client is not None:
        if _alive(_client):
            return _client
        logger.warning("[MONGODB] Cached client failed ping, reconnecting")
        _client.close()
        _client = None

    try:
        _client = _connect()
    except PyMongoError as e:
        logger.error("[MONGODB] Connection failed", extra={"database": DATABASE_NAME, "error": str(e)[:200]})
        return None

    logger.info("[MONGODB] Connected", extra={"database": DATABASE_NAME})
    return _client
