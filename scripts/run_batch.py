"""Batch-process a directory of images through the Canny or Sobel edge pipeline."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from tqdm import tqdm

from edgemap.config import load_config
from edgemap.edges.canny import compute_canny_edges, compute_sobel_edges
from edgemap.errors import EdgeMapError
from edgemap.pipeline import ALGORITHMS
from edgemap.utils import OUTPUT_DIR, list_images, save_json

FRAMES_DIR = "data/frames"


def already_processed(image_id: str, output_dir: str, algorithm: str) -> bool:
    """Check if this image already has an edge map for the algorithm."""
    return (Path(output_dir) / f"{image_id}_{algorithm}.png").exists()


def main() -> None:
    parser = argparse.ArgumentParser(description="Batch-run the edge pipeline on all frames")
    parser.add_argument("--image-dir", default=FRAMES_DIR, help="Directory of input images")
    parser.add_argument("--output-dir", default=str(OUTPUT_DIR), help="Where edge PNGs are written")
    parser.add_argument("--algorithm", default="canny", choices=list(ALGORITHMS))
    parser.add_argument("--config", default=None, help="YAML file with sigma / thresholds / boundary")
    parser.add_argument("--force", action="store_true", help="Reprocess even if output already exists")
    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except (EdgeMapError, FileNotFoundError) as e:
        print(f"Invalid configuration: {e}")
        sys.exit(2)

    if not Path(args.image_dir).is_dir():
        print(f"Image directory not found: {args.image_dir}")
        sys.exit(1)

    image_paths = list_images(args.image_dir)
    if not image_paths:
        print(f"No images found in {args.image_dir}")
        sys.exit(1)

    print(f"Found {len(image_paths)} images in {args.image_dir}")
    run_stage = compute_canny_edges if args.algorithm == "canny" else compute_sobel_edges

    success, skipped, failed = 0, 0, 0
    outputs: dict[str, str] = {}
    skipped_ids: list[str] = []
    errors: dict[str, str] = {}

    for img_path in tqdm(image_paths, desc=f"{args.algorithm} edges"):
        image_id = img_path.stem

        if not args.force and already_processed(image_id, args.output_dir, args.algorithm):
            tqdm.write(f"  SKIP {image_id} (already processed)")
            skipped_ids.append(image_id)
            skipped += 1
            continue

        try:
            outputs[image_id] = run_stage(str(img_path), args.output_dir, config)
            success += 1
        except (EdgeMapError, FileNotFoundError) as e:
            tqdm.write(f"  FAIL {image_id}: {e}")
            errors[image_id] = str(e)
            failed += 1

    save_json(
        {
            "algorithm": args.algorithm,
            "config": config.to_dict(),
            "outputs": outputs,
            "skipped": skipped_ids,
            "errors": errors,
        },
        str(Path(args.output_dir) / f"batch_{args.algorithm}_summary.json"),
    )
    print(f"\nBatch complete: {success} ok | {skipped} skipped | {failed} failed")


if __name__ == "__main__":
    main()
