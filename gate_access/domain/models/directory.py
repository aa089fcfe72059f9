# Standard library imports
from datetime import datetime
from typing import Dict, Iterable, Iterator, Optional, Tuple

# Local application imports
from .identity import Identity, Role


class DirectorySnapshot:
    """
    Read-only, ordered view of enrolled identities at a point in time.

    Order matters: the matcher breaks exact distance ties in favour of the
    identity that comes first here.
    """

    def __init__(self, identities: Iterable[Identity], loaded_at: Optional[datetime] = None) -> None:
        self._identities: Tuple[Identity, ...] = tuple(identities)
        self.loaded_at = loaded_at
        self._by_key: Dict[str, Identity] = {}
        for identity in self._identities:
            # First enrollment wins if the store holds duplicates
            self._by_key.setdefault(identity.key, identity)

    def __len__(self) -> int:
        return len(self._identities)

    def __iter__(self) -> Iterator[Identity]:
        return iter(self._identities)

    def __getitem__(self, index: int) -> Identity:
        return self._identities[index]

    @property
    def identities(self) -> Tuple[Identity, ...]:
        return self._identities

    def get(self, role: Role, person_id: str) -> Optional[Identity]:
        return self._by_key.get(f"{role.value}:{person_id}")
