"""Constants for domain model field names"""

from .identity_fields import IdentityFields
from .attendance_fields import AttendanceFields
from .pass_request_fields import PassRequestFields
from .access_log_fields import AccessLogFields

__all__ = [
    "IdentityFields",
    "AttendanceFields",
    "PassRequestFields",
    "AccessLogFields",
]
