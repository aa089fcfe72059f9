from .database_provider import DatabaseProvider
from .repository_provider import RepositoryProvider
from .gate_provider import GateProvider


__all__ = [
    "DatabaseProvider",
    "RepositoryProvider",
    "GateProvider",
]
