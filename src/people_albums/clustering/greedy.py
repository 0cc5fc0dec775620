"""First-fit greedy assignment of faces to person clusters."""

from collections.abc import Iterable

from people_albums.clustering.similarity import cosine_similarity
from people_albums.config import CLUSTER_NAME_TEMPLATE, SIMILARITY_THRESHOLD
from people_albums.models import FaceCluster, FaceInstance


def assign_clusters(
    faces: Iterable[FaceInstance],
    threshold: float = SIMILARITY_THRESHOLD,
) -> list[FaceCluster]:
    """Group faces into clusters in a single pass.

    Each face is compared with the seed (first member) of every existing
    cluster in creation order and joins the first one scoring strictly above
    ``threshold``. A face that matches nothing seeds a new cluster. The result
    depends on input order: the same faces in a different order may produce a
    different partition.

    Args:
        faces: Face instances, in detection order.
        threshold: Cosine similarity a face must exceed to join a cluster.

    Returns:
        Clusters in creation order, named "Person 1", "Person 2", ...
    """
    if not -1.0 <= threshold <= 1.0:
        raise ValueError(f"threshold must be within [-1, 1], got {threshold}")

    clusters: list[FaceCluster] = []

    for face in faces:
        match = _first_match(face, clusters, threshold)
        if match is not None:
            match.members.append(face)
            continue

        clusters.append(
            FaceCluster(
                name=CLUSTER_NAME_TEMPLATE.format(index=len(clusters) + 1),
                members=[face],
            )
        )

    return clusters


def _first_match(
    face: FaceInstance,
    clusters: list[FaceCluster],
    threshold: float,
) -> FaceCluster | None:
    for cluster in clusters:
        if cosine_similarity(face.embedding, cluster.seed.embedding) > threshold:
            return cluster
    return None
