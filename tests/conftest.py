"""Shared test fixtures."""

import threading
from pathlib import Path

import numpy as np
import pytest

from people_albums.detection.detector import Detection
from people_albums.models import BoundingBox, FaceCluster, FaceInstance, Photo

BOX = BoundingBox(x=0.1, y=0.1, width=0.2, height=0.2)


def make_face(
    face_id: str,
    embedding: list[float],
    photo_id: str = "p1",
    confidence: float = 0.9,
) -> FaceInstance:
    """Helper to create a FaceInstance with a readable ID."""
    return FaceInstance(
        id=face_id,
        photo_id=photo_id,
        bounding_box=BOX,
        embedding=np.array(embedding, dtype=np.float32),
        confidence=confidence,
    )


def make_cluster(name: str, faces: list[FaceInstance], cluster_id: str | None = None) -> FaceCluster:
    cluster = FaceCluster(name=name, members=list(faces))
    if cluster_id is not None:
        cluster.id = cluster_id
    return cluster


def make_photos(*photo_ids: str) -> list[Photo]:
    return [Photo(id=photo_id, path=Path(f"/photos/{photo_id}.jpg")) for photo_id in photo_ids]


class FakeDetector:
    """Detector returning canned detections per photo ID.

    A value that is an Exception is raised instead. If ``gate`` is set, each
    call waits on it before returning, so tests can hold a run mid-batch.
    """

    def __init__(self, results: dict, gate: threading.Event | None = None) -> None:
        self.results = results
        self.gate = gate
        self.calls: list[str] = []
        self.started = threading.Event()

    def detect(self, photo: Photo) -> list[Detection]:
        self.calls.append(photo.id)
        self.started.set()
        if self.gate is not None:
            self.gate.wait(timeout=5)
        result = self.results.get(photo.id, [])
        if isinstance(result, Exception):
            raise result
        return list(result)


def detection(embedding: list[float] | None, confidence: float = 0.9) -> Detection:
    return Detection(
        bounding_box=BOX,
        confidence=confidence,
        embedding=None if embedding is None else np.array(embedding, dtype=np.float32),
    )


@pytest.fixture
def scenario_faces() -> list[FaceInstance]:
    """Two near-identical faces in p1 and an unrelated face in p2."""
    return [
        make_face("A", [1.0, 0.0], photo_id="p1", confidence=0.9),
        make_face("B", [0.99, 0.14], photo_id="p1", confidence=0.8),
        make_face("C", [0.0, 1.0], photo_id="p2", confidence=0.95),
    ]
