# Standard library imports
import logging
from typing import Any, Dict, List, Optional

# External package imports
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

# Local application imports
from ...domain.constants import IdentityFields
from ...domain.models.identity import Identity, Mode, Role, to_descriptor
from ...domain.repositories.directory_repository import DirectoryRepository
from .mongo_connection import get_staff_collection, get_students_collection
from .mongo_errors import translate_error

logger = logging.getLogger(__name__)

_PROJECTION = {
    IdentityFields.USERNAME: 1,
    IdentityFields.NAME: 1,
    IdentityFields.LEGACY_NAME: 1,
    IdentityFields.DEPARTMENT: 1,
    IdentityFields.MODE: 1,
    IdentityFields.FACE_DESCRIPTOR: 1,
    IdentityFields.ACTIVE: 1,
}


class MongoDirectoryRepository(DirectoryRepository):
    """MongoDB implementation of DirectoryRepository over the staff and students collections"""

    def __init__(
        self,
        staff_collection: Optional[Collection] = None,
        students_collection: Optional[Collection] = None,
    ) -> None:
        self.staff_collection = staff_collection if staff_collection is not None else get_staff_collection()
        self.students_collection = (
            students_collection if students_collection is not None else get_students_collection()
        )

    def list_identities(self) -> List[Identity]:
        """
        Load every enrolled identity with a usable descriptor.

        Staff come first, then students ordered by department and username.
        Documents that cannot be turned into an identity are skipped with a
        warning so one bad enrollment does not take the gate down.
        """
        staff = self._load(self.staff_collection, Role.STAFF)
        students = self._load(self.students_collection, Role.STUDENT)
        staff.sort(key=lambda identity: identity.id)
        students.sort(key=lambda identity: (identity.department, identity.id))
        return staff + students

    def _load(self, collection: Collection, role: Role) -> List[Identity]:
        query = {IdentityFields.ACTIVE: {"$ne": False}}
        try:
            documents = list(collection.find(query, _PROJECTION))
        except PyMongoError as e:
            raise translate_error(e, f"list_{role.value}_identities") from e

        identities: List[Identity] = []
        for document in documents:
            identity = self._document_to_identity(document, role)
            if identity is not None:
                identities.append(identity)
        return identities

    def _document_to_identity(self, document: Dict[str, Any], role: Role) -> Optional[Identity]:
        """
        Convert MongoDB document to Identity domain model

        Returns:
            Identity, or None when the document has no username, no name or
            no numeric face descriptor
        """
        username = document.get(IdentityFields.USERNAME)
        name = document.get(IdentityFields.NAME) or document.get(IdentityFields.LEGACY_NAME)
        descriptor = to_descriptor(document.get(IdentityFields.FACE_DESCRIPTOR))

        if not username or descriptor is None:
            logger.warning(
                f"Skipping {role.value} document {document.get(IdentityFields.MONGO_ID)}: "
                f"missing username or face descriptor"
            )
            return None

        try:
            return Identity(
                id=str(username),
                name=str(name or ""),
                department=str(document.get(IdentityFields.DEPARTMENT) or ""),
                role=role,
                mode=Mode.parse(document.get(IdentityFields.MODE), role),
                descriptor=descriptor,
            )
        except ValueError as e:
            logger.warning(f"Skipping {role.value} {username}: {e}")
            return None
