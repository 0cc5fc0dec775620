"""Data models for photos, faces and person clusters."""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path

import numpy as np


@dataclass(frozen=True)
class Photo:
    """A photo from the library. ``id`` is stable for the lifetime of the library."""

    id: str
    path: Path | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class BoundingBox:
    """Normalized face rectangle; every field lies in [0, 1]."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class FaceInstance:
    """A single detected face within a photo."""

    id: str
    photo_id: str
    bounding_box: BoundingBox
    embedding: np.ndarray = field(compare=False, repr=False)
    confidence: float = 0.0


def new_face_id() -> str:
    return str(uuid.uuid4())


@dataclass
class FaceCluster:
    """A group of faces inferred to belong to one person."""

    name: str
    members: list[FaceInstance] = field(default_factory=list)
    representative_photo_id: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def seed(self) -> FaceInstance:
        """The first face ever added; new faces are compared against it."""
        return self.members[0]

    @property
    def photo_ids(self) -> set[str]:
        return {face.photo_id for face in self.members}

    def copy(self) -> "FaceCluster":
        """Return a detached copy; later renames or merges do not affect it."""
        return replace(self, members=list(self.members))


@dataclass(frozen=True)
class PersonAlbum:
    """Photos of one person, built from a cluster on demand."""

    name: str
    cluster_id: str
    photos: list[Photo]


@dataclass(frozen=True)
class BatchSnapshot:
    """Point-in-time view of the orchestrator state for the consuming side.

    ``clusters`` are copies, so the snapshot does not change when the store
    is mutated afterwards.
    """

    is_processing: bool
    progress: float
    clusters: list[FaceCluster]
    dropped_detections: int = 0


@dataclass(frozen=True)
class BatchResult:
    """Outcome of one batch run, delivered through the run's future.

    ``clusters`` are copies taken at publication time.
    """

    clusters: list[FaceCluster]
    photo_count: int
    face_count: int
    dropped_detections: int
    cancelled: bool = False
