from typing import TYPE_CHECKING
from ...infrastructure.db.mongo_connection import (
    get_client,
    get_database,
    get_staff_collection,
    get_students_collection,
    get_attendance_collection,
    get_access_log_collection,
    get_pass_request_collection,
)

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class DatabaseProvider:
    """Centralized database connection provider - single source of truth for all DB connections"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register the Mongo client, database and gate collections in the container.
        PyMongo connects lazily, so nothing here blocks on an unreachable server.
        """
        container.register_singleton("mongo_client", get_client())
        container.register_singleton("database", get_database())
        container.register_singleton("staff_collection", get_staff_collection())
        container.register_singleton("students_collection", get_students_collection())
        container.register_singleton("attendance_collection", get_attendance_collection())
        container.register_singleton("access_log_collection", get_access_log_collection())
        container.register_singleton("pass_request_collection", get_pass_request_collection())
