"""Tests for photo, face and cluster dataclasses."""

import dataclasses

import numpy as np
import pytest
from conftest import make_face

from people_albums.models import FaceCluster, Photo


def test_face_instance_is_immutable():
    face = make_face("a", [1.0, 0.0])
    with pytest.raises(dataclasses.FrozenInstanceError):
        face.confidence = 0.1


def test_face_equality_ignores_embedding():
    a = make_face("a", [1.0, 0.0])
    b = make_face("a", [0.0, 1.0])
    assert a == b
    assert hash(a) == hash(b)
    assert a != make_face("other", [1.0, 0.0])


def test_cluster_defaults():
    cluster = FaceCluster(name="Person 1")
    other = FaceCluster(name="Person 2")
    assert cluster.members == []
    assert cluster.representative_photo_id is None
    assert cluster.id != other.id


def test_cluster_seed_and_photo_ids():
    faces = [
        make_face("a", [1.0], photo_id="p1"),
        make_face("b", [1.0], photo_id="p2"),
        make_face("c", [1.0], photo_id="p1"),
    ]
    cluster = FaceCluster(name="Person 1", members=faces)
    assert cluster.seed.id == "a"
    assert cluster.photo_ids == {"p1", "p2"}


def test_photo_optional_fields():
    photo = Photo(id="p1")
    assert photo.path is None
    assert photo.created_at is None


def test_face_embedding_is_numpy():
    face = make_face("a", [0.5, 0.5])
    assert isinstance(face.embedding, np.ndarray)


def test_cluster_copy_is_detached():
    cluster = FaceCluster(name="Person 1", members=[make_face("a", [1.0])])
    copy = cluster.copy()
    cluster.name = "Alice"
    cluster.members.append(make_face("b", [1.0]))
    assert copy.id == cluster.id
    assert copy.name == "Person 1"
    assert [face.id for face in copy.members] == ["a"]
