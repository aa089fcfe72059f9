class AccessLogFields:
    """MongoDB field names for access_logs collection"""

    MONGO_ID = "_id"

    PERSON_ID = "person_id"
    ROLE = "role"
    NAME = "name"
    DEPARTMENT = "department"

    DIRECTION = "direction"
    TIMESTAMP = "timestamp"
    STATUS = "status"
    REASON = "reason"

    TERMINAL_ID = "terminal_id"
    DISTANCE = "distance"
    PASS_REQUEST_ID = "pass_request_id"
