"""People albums CLI: group the faces in a photo library into people."""

import argparse


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for face clustering."""
    from people_albums.config import MIN_CLUSTER_SIZE, PHOTO_FETCH_LIMIT, SIMILARITY_THRESHOLD

    parser = argparse.ArgumentParser(description="Group photos by the people in them")
    subparsers = parser.add_subparsers(dest="command")

    # cluster
    cluster_parser = subparsers.add_parser(
        "cluster", help="Detect faces and group them into people"
    )
    cluster_parser.add_argument(
        "paths", nargs="*", help="Image files or folders (default: PHOTOS_DIR from .env)"
    )
    cluster_parser.add_argument(
        "--threshold",
        type=float,
        default=SIMILARITY_THRESHOLD,
        help=f"Cosine similarity needed to join a person (default: {SIMILARITY_THRESHOLD})",
    )
    cluster_parser.add_argument(
        "--min-cluster-size",
        type=int,
        default=MIN_CLUSTER_SIZE,
        help=f"Smallest group reported as a person (default: {MIN_CLUSTER_SIZE})",
    )
    cluster_parser.add_argument(
        "--limit",
        type=int,
        default=PHOTO_FETCH_LIMIT,
        help=f"Max number of photos to process, newest first (default: {PHOTO_FETCH_LIMIT})",
    )
    cluster_parser.add_argument("--device", default=None, help="Device: cuda or cpu")
    cluster_parser.add_argument("--json", dest="json_path", help="Write a JSON report to this file")
    cluster_parser.add_argument("--verbose", action="store_true", help="Show debug logging")

    # photos
    photos_parser = subparsers.add_parser("photos", help="List the photos that would be processed")
    photos_parser.add_argument("paths", nargs="*", help="Image files or folders")
    photos_parser.add_argument(
        "--limit",
        type=int,
        default=PHOTO_FETCH_LIMIT,
        help=f"Max number of photos to list (default: {PHOTO_FETCH_LIMIT})",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return

    if args.command == "cluster":
        _cmd_cluster(args)
    elif args.command == "photos":
        _cmd_photos(args)


def _configure_logging(verbose: bool) -> None:
    import logging

    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


def _cmd_photos(args: argparse.Namespace) -> None:
    """List photos found in the given sources."""
    from people_albums.photos import load_photos

    photos = load_photos(args.paths or None, limit=args.limit)
    for photo in photos:
        taken = photo.created_at.strftime("%Y-%m-%d %H:%M") if photo.created_at else "-"
        print(f"[{taken}] {photo.id}")
    print(f"{len(photos)} photos")


def _cmd_cluster(args: argparse.Namespace) -> None:
    """Detect faces in the photos and print the people found."""
    from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

    from people_albums.clustering.orchestrator import BatchOrchestrator
    from people_albums.config import DEFAULT_DEVICE
    from people_albums.photos import load_photos

    _configure_logging(args.verbose)

    photos = load_photos(args.paths or None, limit=args.limit)
    if not photos:
        print("No photos found.")
        return

    device = args.device or DEFAULT_DEVICE
    print(f"Found {len(photos)} photos.")
    print(f"Loading InsightFace model on {device}...")

    from people_albums.detection.insightface_detector import InsightFaceDetector

    detector = InsightFaceDetector(device=device)

    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
    ) as progress:
        task = progress.add_task("Finding people", total=1.0)

        def on_update(snapshot):
            progress.update(task, completed=snapshot.progress)

        with BatchOrchestrator(
            detector,
            threshold=args.threshold,
            min_cluster_size=args.min_cluster_size,
            on_update=on_update,
        ) as orchestrator:
            result = orchestrator.run(photos).result()
            store = orchestrator.store

    print("\nDone.")
    print(f"  Photos processed: {result.photo_count}")
    print(f"  Faces detected: {result.face_count}")
    if result.dropped_detections > 0:
        print(f"  Dropped detections: {result.dropped_detections}")
    print(f"  People found: {len(result.clusters)}")

    for cluster in store.clusters:
        cluster_photos = store.photos_for_cluster(cluster, photos)
        print(
            f"  {cluster.name:<12} {len(cluster.members):>4} faces "
            f"{len(cluster_photos):>4} photos  {cluster.representative_photo_id or '-'}"
        )

    if args.json_path:
        _write_report(args.json_path, store, photos)
        print(f"Report written to {args.json_path}")


def cluster_report(store, photos) -> list[dict]:
    """Summarize the store's clusters as JSON-serializable dicts."""
    report = []
    for cluster in store.clusters:
        album = store.album_for_cluster(cluster.id, photos)
        report.append(
            {
                "id": cluster.id,
                "name": cluster.name,
                "representative_photo_id": cluster.representative_photo_id,
                "album": album.name if album else None,
                "photos": [photo.id for photo in album.photos] if album else [],
                "faces": [
                    {
                        "id": face.id,
                        "photo_id": face.photo_id,
                        "confidence": face.confidence,
                        "bbox": [
                            face.bounding_box.x,
                            face.bounding_box.y,
                            face.bounding_box.width,
                            face.bounding_box.height,
                        ],
                    }
                    for face in cluster.members
                ],
            }
        )
    return report


def _write_report(json_path: str, store, photos) -> None:
    import json
    from pathlib import Path

    Path(json_path).write_text(
        json.dumps(cluster_report(store, photos), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
