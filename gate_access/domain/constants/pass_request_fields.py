class PassRequestFields:
    """MongoDB field names for pass_requests collection"""

    MONGO_ID = "_id"

    USERNAME = "username"
    TYPE = "type"
    STATUS = "status"
    DATE = "date"
    ARRIVAL_TIME = "arrival_time"
    REASON = "reason"
    CREATED_AT = "created_at"
