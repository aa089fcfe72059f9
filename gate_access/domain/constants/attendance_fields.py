class AttendanceFields:
    """MongoDB field names for attendance collection"""

    MONGO_ID = "_id"

    PERSON_ID = "person_id"
    ROLE = "role"
    DATE = "date"

    IN_TIMESTAMP = "in_timestamp"
    OUT_TIMESTAMP = "out_timestamp"
    STATUS = "status"

    CYCLE = "cycle"
    VERSION = "version"
    UPDATED_AT = "updated_at"
    # Access log entry that produced the current state
    LAST_ENTRY_ID = "last_entry_id"
