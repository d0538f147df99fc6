from beacon.db.models.snapshot import AppSnapshot

__all__ = [
    "AppSnapshot"
]
