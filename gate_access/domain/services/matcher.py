"""
Face matcher
------------

Nearest-neighbour search of a query descriptor against the directory using
Euclidean distance. An identity only becomes the match when its distance is
strictly below both the best distance so far and the threshold; exact ties
go to the identity that comes first in directory order.

The scan can be split by role/department across worker threads. Each worker
returns its local best together with the identity's directory position, so
merging by (distance, position) gives the same answer as a sequential scan.
"""
# Standard library imports
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

# External package imports
import numpy as np

# Local application imports
from ..exceptions import InvalidDescriptorError
from ..models.identity import Identity

logger = logging.getLogger(__name__)

Candidate = Tuple[int, Identity]


@dataclass(frozen=True)
class MatchResult:
    identity: Identity
    distance: float


def validate_descriptor(query: Any, dimension: int) -> np.ndarray:
    """
    Convert a query descriptor to a float vector and check its shape.

    Raises:
        InvalidDescriptorError: If the query is not a finite vector of `dimension` numbers
    """
    if query is None:
        raise InvalidDescriptorError("Descriptor is missing", expected_dimension=dimension)
    try:
        vector = np.asarray(query, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidDescriptorError(
            f"Descriptor is not numeric: {e}", expected_dimension=dimension
        ) from e
    if vector.ndim != 1:
        raise InvalidDescriptorError(
            f"Descriptor must be one-dimensional, got shape {vector.shape}",
            expected_dimension=dimension,
        )
    if vector.size != dimension:
        raise InvalidDescriptorError(
            f"Descriptor has {vector.size} values, expected {dimension}",
            expected_dimension=dimension,
            actual_dimension=int(vector.size),
        )
    if not np.all(np.isfinite(vector)):
        raise InvalidDescriptorError(
            "Descriptor contains NaN or infinite values",
            expected_dimension=dimension,
            actual_dimension=int(vector.size),
        )
    return vector


def euclidean_distances(query: np.ndarray, descriptors: np.ndarray) -> np.ndarray:
    """Distance from `query` to each row of `descriptors`."""
    return np.linalg.norm(descriptors - query, axis=1)


def partition_candidates(candidates: Sequence[Candidate]) -> List[List[Candidate]]:
    """Group candidates by role/department, keeping directory positions."""
    groups: Dict[str, List[Candidate]] = {}
    for position, identity in candidates:
        department = identity.department or "*"
        groups.setdefault(f"{identity.role.value}/{department}", []).append((position, identity))
    return list(groups.values())


def _best_in(
    query: np.ndarray,
    candidates: Sequence[Candidate],
    threshold: float,
) -> Optional[Tuple[int, float]]:
    """
    Best (position, distance) among candidates with distance < threshold.

    np.argmin returns the first occurrence of the minimum, which is the
    strict running-minimum rule: later identities at an equal distance never
    replace the earlier one.
    """
    if not candidates:
        return None
    matrix = np.asarray([identity.descriptor for _, identity in candidates], dtype=np.float64)
    distances = euclidean_distances(query, matrix)
    best_index = int(np.argmin(distances))
    best_distance = float(distances[best_index])
    if best_distance >= threshold:
        return None
    return candidates[best_index][0], best_distance


def match(
    query: Any,
    directory: Sequence[Identity],
    threshold: float,
    dimension: int = 128,
    workers: int = 1,
) -> Optional[MatchResult]:
    """
    Find the closest enrolled identity to `query`.

    Args:
        query: Face descriptor (sequence of numbers)
        directory: Identities in directory order
        threshold: Distances must be strictly below this to match
        dimension: Expected descriptor length
        workers: Threads to spread role/department partitions over

    Returns:
        MatchResult for the closest identity, or None if nobody is under the threshold

    Raises:
        InvalidDescriptorError: If the query is malformed
    """
    vector = validate_descriptor(query, dimension)
    if threshold <= 0:
        return None

    candidates: List[Candidate] = []
    for position, identity in enumerate(directory):
        if identity.is_matchable(dimension):
            candidates.append((position, identity))
        elif identity.descriptor is not None:
            logger.debug(
                "Skipping %s: descriptor has %d values, expected %d",
                identity.key, len(identity.descriptor), dimension,
            )
    if not candidates:
        return None

    if workers > 1:
        partitions = partition_candidates(candidates)
        with ThreadPoolExecutor(max_workers=min(workers, len(partitions))) as executor:
            partial = list(executor.map(lambda group: _best_in(vector, group, threshold), partitions))
        found = [result for result in partial if result is not None]
        if not found:
            return None
        position, distance = min(found, key=lambda result: (result[1], result[0]))
    else:
        best = _best_in(vector, candidates, threshold)
        if best is None:
            return None
        position, distance = best

    return MatchResult(identity=directory[position], distance=distance)


class FaceMatcher:
    """Matcher bound to the deployment's threshold, dimension and worker count"""

    def __init__(self, threshold: float, dimension: int = 128, workers: int = 1) -> None:
        if dimension <= 0:
            raise ValueError("Descriptor dimension must be positive")
        self.threshold = threshold
        self.dimension = dimension
        self.workers = max(1, workers)

    def match(
        self,
        query: Any,
        directory: Sequence[Identity],
        threshold: Optional[float] = None,
    ) -> Optional[MatchResult]:
        return match(
            query,
            directory,
            self.threshold if threshold is None else threshold,
            dimension=self.dimension,
            workers=self.workers,
        )
