"""
Utility functions for portal gallery runs.

Provides:
- Gallery loading from the JSON fixture
- World construction from a gallery case
- Receipt generation
- Logging setup
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from portal_core.types import Coordinate, Plane
from portal_core.world import GridWorld


def get_gallery_path() -> Path:
    """Get the absolute path to the gallery fixture."""
    # portal_universe/integration_tests/utils.py -> portal_universe -> tests/fixtures
    return Path(__file__).parent.parent / "tests" / "fixtures" / "gallery.json"


def load_gallery(only: Optional[List[str]] = None) -> List[Dict[str, Any]]:
    """
    Load gallery cases.

    Args:
        only: Optional list of case names to keep

    Returns:
        List of case dicts in file order

    Raises:
        FileNotFoundError: If the gallery fixture doesn't exist
        ValueError: If a requested case name is not in the gallery
    """
    gallery_file = get_gallery_path()
    if not gallery_file.exists():
        raise FileNotFoundError(f"Gallery file not found: {gallery_file}")

    with open(gallery_file, "r") as f:
        cases = json.load(f)["cases"]

    if only:
        names = {case["name"] for case in cases}
        missing = [name for name in only if name not in names]
        if missing:
            raise ValueError(f"Unknown gallery cases: {missing}")
        cases = [case for case in cases if case["name"] in only]

    return cases


def build_world(case: Dict[str, Any]) -> GridWorld:
    """Stamp a case's rows onto a fresh GridWorld."""
    world = GridWorld()
    world.stamp(case["rows"], Plane(case["plane"]), case["c"])
    return world


def case_origin(case: Dict[str, Any]) -> Coordinate:
    return Coordinate(*case["origin"])


# Library loggers that share the gallery handlers
ENGINE_LOGGERS = ("portal_core", "portal_forms")

LOG_FORMAT = "%(asctime)s %(levelname)-5s %(name)s: %(message)s"


def setup_gallery_logging(log_file: Path, verbose: bool = False) -> logging.Logger:
    """
    Route gallery and engine logging to the console and a run log.

    The console always shows INFO and above. The file gets INFO, or DEBUG
    when `verbose` is set, which includes every plane rejection logged by
    portal_forms.engine.

    Returns:
        The "gallery" logger used by the runner itself
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_level = logging.DEBUG if verbose else logging.INFO

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")
    file_handler = logging.FileHandler(log_file, mode="w")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(formatter)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)

    gallery_logger = logging.getLogger("gallery")
    for name in ("gallery",) + ENGINE_LOGGERS:
        target = logging.getLogger(name)
        for old in list(target.handlers):
            target.removeHandler(old)
            old.close()
        target.setLevel(file_level)
        target.propagate = False
        target.addHandler(file_handler)
        target.addHandler(console_handler)

    return gallery_logger


def build_receipt(
    case_name: str,
    attempts: Optional[List[Dict[str, Any]]] = None,
    region: Optional[Dict[str, Any]] = None,
    status: str = "PASS",
    error: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build a receipt dictionary for a gallery case.

    Args:
        case_name: Gallery case name
        attempts: Per-plane attempt records
        region: Region summary (plane, interior, placed) if one was found
        status: "PASS" or "FAIL"
        error: Error message if status is FAIL

    Returns:
        Receipt dictionary
    """
    receipt = {
        "case": case_name,
        "timestamp": datetime.now().isoformat(),
        "status": status,
    }

    if attempts is not None:
        receipt["attempts"] = attempts

    if region is not None:
        receipt["region"] = region

    if error is not None:
        receipt["error"] = error

    return receipt


def save_receipt(receipt: Dict[str, Any], output_dir: Path) -> None:
    """Save receipt to <output_dir>/<case>.json."""
    output_dir.mkdir(parents=True, exist_ok=True)
    receipt_file = output_dir / f"{receipt['case']}.json"

    with open(receipt_file, "w") as f:
        json.dump(receipt, f, indent=2)


def compute_summary_stats(receipts: List[Dict[str, Any]]) -> Dict[str, Any]:
    total = len(receipts)
    passed = sum(1 for r in receipts if r["status"] == "PASS")
    found = [r["region"] for r in receipts if "region" in r]

    return {
        "total_cases": total,
        "passed": passed,
        "failed": total - passed,
        "pass_rate": passed / total if total > 0 else 0.0,
        "regions_found": len(found),
        "cells_placed": sum(region["placed"] for region in found),
    }
