from .repos import SnapshotRepoPort

__all__ = [
    "SnapshotRepoPort",
]
