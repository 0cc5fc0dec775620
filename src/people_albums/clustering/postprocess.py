"""Representative photo selection and noise filtering for raw clusters."""

from collections.abc import Iterable, Sequence
from dataclasses import replace

from people_albums.config import MIN_CLUSTER_SIZE
from people_albums.models import FaceCluster, FaceInstance, Photo


def postprocess_clusters(
    clusters: Sequence[FaceCluster],
    photos: Iterable[Photo],
    min_cluster_size: int = MIN_CLUSTER_SIZE,
) -> list[FaceCluster]:
    """Annotate clusters with a representative photo and drop the small ones.

    The representative photo is the photo of the most confident member (the
    first one on ties), provided that photo is part of ``photos``. Clusters
    with fewer than ``min_cluster_size`` members are treated as noise.
    Inputs are left untouched; surviving clusters are returned as copies in
    their original order.
    """
    if min_cluster_size < 1:
        raise ValueError(f"min_cluster_size must be positive, got {min_cluster_size}")

    known_photo_ids = {photo.id for photo in photos}
    result: list[FaceCluster] = []

    for cluster in clusters:
        if len(cluster.members) < min_cluster_size:
            continue

        best = best_face(cluster.members)
        representative = best.photo_id if best.photo_id in known_photo_ids else None
        result.append(
            replace(
                cluster,
                members=list(cluster.members),
                representative_photo_id=representative,
            )
        )

    return result


def best_face(faces: Sequence[FaceInstance]) -> FaceInstance:
    """Return the highest-confidence face, keeping the earliest one on ties."""
    best = faces[0]
    for face in faces[1:]:
        if face.confidence > best.confidence:
            best = face
    return best
