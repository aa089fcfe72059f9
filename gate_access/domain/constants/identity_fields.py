"""Constants for directory (staff / students) document field names"""


class IdentityFields:
    """MongoDB field names shared by the staff and students collections"""

    MONGO_ID = "_id"

    USERNAME = "username"
    NAME = "name"
    # Older student enrollments stored the display name capitalised
    LEGACY_NAME = "Name"
    DEPARTMENT = "department"
    MODE = "mode"
    FACE_DESCRIPTOR = "faceDescriptor"
    ACTIVE = "active"
