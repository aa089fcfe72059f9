"""
MongoDB connection
------------------

Single entry-point to the gate database using synchronous PyMongo. The gate
core is synchronous and runs in worker threads, so one shared MongoClient
(which is thread-safe and pools connections) serves every terminal.
"""
# Standard library imports
import logging
from typing import Optional

# External package imports
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

# Local application imports
from ...core.config import get_settings

logger = logging.getLogger(__name__)

STAFF_COLLECTION = "staff"
STUDENTS_COLLECTION = "students"
ATTENDANCE_COLLECTION = "attendance"
ACCESS_LOGS_COLLECTION = "access_logs"
PASS_REQUESTS_COLLECTION = "pass_requests"

# Global MongoDB connection instances (singleton pattern)
_mongo_client: Optional[MongoClient] = None
_mongo_database: Optional[Database] = None


def get_client() -> MongoClient:
    """Get or create the singleton MongoClient with connection timeouts (fail fast)."""
    global _mongo_client
    if _mongo_client is not None:
        return _mongo_client

    settings = get_settings()
    if not settings.mongo_uri:
        raise RuntimeError("MONGO_URI not set. Please configure it in your .env file.")

    # tz_aware so stored timestamps come back as aware UTC datetimes
    _mongo_client = MongoClient(
        settings.mongo_uri,
        serverSelectionTimeoutMS=settings.mongo_timeout_ms,
        connectTimeoutMS=settings.mongo_timeout_ms,
        tz_aware=True,
    )
    return _mongo_client


def get_database() -> Database:
    """
    Get MongoDB database instance (singleton pattern)

    Returns:
        MongoDB database instance
    """
    global _mongo_database
    if _mongo_database is not None:
        return _mongo_database
    _mongo_database = get_client()[get_settings().mongo_database_name]
    return _mongo_database


def get_staff_collection() -> Collection:
    return get_database()[STAFF_COLLECTION]


def get_students_collection() -> Collection:
    return get_database()[STUDENTS_COLLECTION]


def get_attendance_collection() -> Collection:
    """
    Get attendance collection from MongoDB

    Returns:
        MongoDB collection holding one record per person, role and day
    """
    return get_database()[ATTENDANCE_COLLECTION]


def get_access_log_collection() -> Collection:
    """
    Get access_logs collection from MongoDB

    Returns:
        MongoDB collection holding the append-only gate audit trail
    """
    return get_database()[ACCESS_LOGS_COLLECTION]


def get_pass_request_collection() -> Collection:
    return get_database()[PASS_REQUESTS_COLLECTION]


def ensure_indexes(database: Optional[Database] = None) -> None:
    """
    Create the indexes the gate relies on. Safe to call repeatedly.

    The unique attendance index is what makes a concurrent first scan of the
    day fail instead of creating two records.
    """
    db = database if database is not None else get_database()

    db[ATTENDANCE_COLLECTION].create_index(
        [("person_id", ASCENDING), ("role", ASCENDING), ("date", ASCENDING)],
        unique=True,
        name="uniq_person_role_date",
    )
    db[ACCESS_LOGS_COLLECTION].create_index(
        [("person_id", ASCENDING), ("timestamp", DESCENDING)],
        name="person_timestamp",
    )
    db[ACCESS_LOGS_COLLECTION].create_index(
        [("terminal_id", ASCENDING), ("timestamp", DESCENDING)],
        name="terminal_timestamp",
    )
    db[PASS_REQUESTS_COLLECTION].create_index(
        [("username", ASCENDING), ("created_at", DESCENDING)],
        name="username_created_at",
    )
    logger.info("MongoDB indexes ensured")


def close_client() -> None:
    """Close the shared client (application shutdown)."""
    global _mongo_client, _mongo_database
    if _mongo_client is not None:
        _mongo_client.close()
    _mongo_client = None
    _mongo_database = None
