#!/usr/bin/env python3
"""
Gallery run: end-to-end portal detection on hand-built frames.

For every case in tests/fixtures/gallery.json:
- stamp the frame into a fresh GridWorld
- trace detection plane by plane
- build the portal and compare against the expected plane/size
- re-run creation and check nothing is written (idempotence)
- break the portal from its first cell and check it is fully cleared

Usage:
    python run_gallery.py
    python run_gallery.py --only nether_classic end_ring_3x3
    python run_gallery.py --verbose
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path to import portal_core / portal_forms
sys.path.insert(0, str(Path(__file__).parent.parent))

from portal_forms.engine import break_connected_region, find_and_create, trace_region
from portal_forms.spec import PRESETS

from utils import (
    build_receipt,
    build_world,
    case_origin,
    compute_summary_stats,
    load_gallery,
    save_receipt,
    setup_gallery_logging,
)

FEEDBACK_SIGNAL = "portal_spawn"


def validate_case(case, logger):
    """
    Run a single gallery case.

    Returns:
        Receipt dictionary
    """
    name = case["name"]
    expect = case["expect"]

    try:
        spec = PRESETS[case["family"]]()
        world = build_world(case)
        origin = case_origin(case)

        region, attempts = trace_region(world, origin, spec)
        attempt_records = [
            {
                "plane": a.plane.value,
                "outcome": a.outcome.value,
                "component_size": a.component_size,
                "interior_size": a.interior_size,
            }
            for a in attempts
        ]
        for a in attempts:
            logger.info(f"Case {name}: plane {a.plane.value} -> {a.outcome.value}")

        if region is None:
            status = "PASS" if not expect["found"] else "FAIL"
            if status == "FAIL":
                logger.error(f"Case {name}: FAIL - expected a region, none found")
            return build_receipt(name, attempts=attempt_records, status=status)

        created = find_and_create(world, origin, spec, FEEDBACK_SIGNAL)
        placed = len(world.mutations)

        world.clear_history()
        find_and_create(world, origin, spec, FEEDBACK_SIGNAL)
        idempotent = len(world.mutations) == 0

        cleared = 0
        portal_cells = world.cells_of(spec.portal_block)
        if portal_cells:
            cleared = break_connected_region(world, min(portal_cells), spec.portal_block)

        region_summary = {
            "plane": region.plane.value,
            "interior": len(region),
            "placed": placed,
            "cleared": cleared,
            "center": list(region.center_block()),
        }

        failures = []
        if not expect["found"]:
            failures.append("found a region where none was expected")
        else:
            if region.plane.value != expect["plane"]:
                failures.append(f"plane {region.plane.value} != {expect['plane']}")
            if len(region) != expect["interior"]:
                failures.append(f"interior {len(region)} != {expect['interior']}")
            if placed != expect["placed"]:
                failures.append(f"placed {placed} != {expect['placed']}")
        if not created:
            failures.append("creation failed after detection succeeded")
        if not idempotent:
            failures.append("second creation wrote cells")
        if cleared != placed:
            failures.append(f"cleared {cleared} of {placed} placed cells")

        if failures:
            for failure in failures:
                logger.error(f"Case {name}: FAIL - {failure}")
            return build_receipt(
                name, attempts=attempt_records, region=region_summary,
                status="FAIL", error="; ".join(failures),
            )

        logger.info(f"Case {name}: PASS ({len(region)} cells on {region.plane.value})")
        return build_receipt(name, attempts=attempt_records, region=region_summary)

    except Exception as e:
        logger.error(f"Case {name}: Exception - {type(e).__name__}: {e}")
        return build_receipt(name, status="FAIL", error=str(e))


def main():
    parser = argparse.ArgumentParser(
        description="Gallery run: freeform portal detection end to end"
    )
    parser.add_argument(
        "--only",
        nargs="*",
        default=None,
        help="Case names to run (default: all)",
    )
    parser.add_argument(
        "--receipts-dir",
        type=Path,
        default=None,
        help="Where to write receipts (default: integration_tests/receipts/gallery)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Write DEBUG engine logs (plane rejections) to the run log",
    )

    args = parser.parse_args()

    integration_dir = Path(__file__).parent
    logs_dir = integration_dir / "logs"
    receipts_dir = args.receipts_dir or integration_dir / "receipts" / "gallery"

    logger = setup_gallery_logging(logs_dir / "gallery.log", verbose=args.verbose)

    logger.info("=" * 80)
    logger.info("Portal gallery run")
    logger.info(f"Cases: {'all' if not args.only else ', '.join(args.only)}")
    logger.info("=" * 80)

    cases = load_gallery(args.only)
    logger.info(f"Loaded {len(cases)} cases")

    receipts = []
    for case in cases:
        logger.info(f"--- Case {case['name']} ---")
        receipt = validate_case(case, logger)
        receipts.append(receipt)
        save_receipt(receipt, receipts_dir)

    stats = compute_summary_stats(receipts)

    logger.info("=" * 80)
    logger.info("SUMMARY")
    logger.info("=" * 80)
    logger.info(f"Total cases: {stats['total_cases']}")
    logger.info(f"Passed: {stats['passed']}")
    logger.info(f"Failed: {stats['failed']}")
    logger.info(f"Pass rate: {stats['pass_rate']:.2%}")
    logger.info(f"Regions found: {stats['regions_found']}")
    logger.info(f"Cells placed: {stats['cells_placed']}")

    return 0 if stats["failed"] == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
