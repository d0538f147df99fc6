from beacon.domains.persistence.services import PersistenceCoordinator

__all__ = [
    "PersistenceCoordinator"
]
