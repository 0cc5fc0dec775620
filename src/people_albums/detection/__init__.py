"""Face detection CLI: show what the detector finds in each photo."""

import argparse


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for face detection."""
    parser = argparse.ArgumentParser(description="People albums face detection")
    subparsers = parser.add_subparsers(dest="command")

    # detect
    detect_parser = subparsers.add_parser("detect", help="Detect faces and print per-photo results")
    detect_parser.add_argument("paths", nargs="+", help="Image files or folders")
    detect_parser.add_argument("--device", default=None, help="Device: cuda or cpu")
    detect_parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Max number of photos to process (default: all)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return

    if args.command == "detect":
        _cmd_detect(args)


def _cmd_detect(args: argparse.Namespace) -> None:
    """Run the detector on each photo and report faces found."""
    from people_albums.config import DEFAULT_DEVICE
    from people_albums.detection.detector import detect_photo
    from people_albums.detection.insightface_detector import InsightFaceDetector
    from people_albums.photos import load_photos

    photos = load_photos(args.paths, limit=args.limit)
    if not photos:
        print("No photos found.")
        return

    device = args.device or DEFAULT_DEVICE
    print(f"Loading InsightFace model on {device}...")
    detector = InsightFaceDetector(device=device)

    total_faces = 0
    dropped = 0
    errors = 0

    for photo in photos:
        outcome = detect_photo(detector, photo)
        if not outcome.ok:
            errors += 1
            print(f"  {photo.id}: error ({outcome.error})")
            continue
        total_faces += len(outcome.faces)
        dropped += outcome.dropped
        scores = ", ".join(f"{face.confidence:.2f}" for face in outcome.faces)
        print(f"  {photo.id}: {len(outcome.faces)} faces [{scores}]")

    print("\nDone.")
    print(f"  Images processed: {len(photos)}")
    print(f"  Faces detected: {total_faces}")
    if len(photos) > errors:
        print(f"  Average faces per image: {total_faces / (len(photos) - errors):.1f}")
    if dropped > 0:
        print(f"  Faces without embedding: {dropped}")
    if errors > 0:
        print(f"  Errors: {errors}")
