"""Command line entry point: reconcile one routing response against trips.

Usage:
    python -m route_reconciler --path route.json --trips trips.json
    python -m route_reconciler --path route.json --trips-url http://host:8000
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence

from .config import (
    AUTO_SELECT_MARGIN_KM,
    AUTO_SELECT_SCORE_THRESHOLD_KM,
    ORIENTATION_THRESHOLD_KM,
    SNAP_TOLERANCE_KM,
)
from .engine import fallback_path, find_trip, reconcile
from .errors import PayloadFormatError, TripSourceError
from .models import ReconcileSettings, Trip, TripId
from .trip_source import TripSourceClient, extract_route_path, trips_from_payload
from .utils import json_dumps


def _setup_logging(verbose: bool) -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )


def _load_json(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except FileNotFoundError as exc:
        raise PayloadFormatError(f"Input file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise PayloadFormatError(f"{path} is not valid JSON: {exc}") from exc


def _load_trips(args: argparse.Namespace) -> List[Trip]:
    if args.trips_url:
        with TripSourceClient(args.trips_url) as client:
            return client.fetch_trips()
    if args.trips is None:
        return []
    data = _load_json(args.trips)
    if not isinstance(data, (list, dict)):
        raise PayloadFormatError(f"{args.trips} must contain a list or object")
    return trips_from_payload(data)


def _resolve_selected(trips: Sequence[Trip], selected: Optional[str]) -> Optional[TripId]:
    """Map the textual ``--selected`` value onto a trip id of the right type."""

    if selected is None:
        return None
    for trip in trips:
        if str(trip.trip_id) == selected:
            return trip.trip_id
    return selected


def _build_parser() -> argparse.ArgumentParser:
    """Return the CLI argument parser."""

    parser = argparse.ArgumentParser(
        description=(
            "Reconcile a routing service path against known trips: fix axis"
            " order, match the trip and snap endpoints."
        )
    )
    parser.add_argument(
        "--path", type=Path, required=True, help="JSON file with the routing response"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--trips", type=Path, help="JSON file with the trip list")
    source.add_argument("--trips-url", help="Base URL of the trip source backend")
    parser.add_argument("--selected", help="Id of the currently selected trip")
    parser.add_argument(
        "--orientation-threshold-km", type=float, default=ORIENTATION_THRESHOLD_KM
    )
    parser.add_argument("--snap-tolerance-km", type=float, default=SNAP_TOLERANCE_KM)
    parser.add_argument(
        "--score-threshold-km", type=float, default=AUTO_SELECT_SCORE_THRESHOLD_KM
    )
    parser.add_argument("--margin-km", type=float, default=AUTO_SELECT_MARGIN_KM)
    parser.add_argument(
        "--fallback",
        action="store_true",
        help="Emit the selected trip's straight line when no path survives",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point used via ``python -m route_reconciler``."""

    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        settings = ReconcileSettings(
            orientation_threshold_km=args.orientation_threshold_km,
            snap_tolerance_km=args.snap_tolerance_km,
            auto_select_score_threshold_km=args.score_threshold_km,
            auto_select_margin_km=args.margin_km,
        )
        raw_path = extract_route_path(_load_json(args.path))
        trips = _load_trips(args)
    except (PayloadFormatError, ValueError) as exc:
        logging.error("%s", exc)
        return 2
    except TripSourceError as exc:
        logging.error("Failed to load trips: %s", exc)
        return 1

    selected_id = _resolve_selected(trips, args.selected)
    logging.info("Reconciling path against %d trips", len(trips))
    result = reconcile(raw_path, trips, selected_id, settings)

    output = result.to_dict()
    if args.fallback:
        line = None
        if result.final_path is None:
            line = fallback_path(find_trip(trips, selected_id))
        output["fallbackPath"] = line
    print(json_dumps(output, indent=2))
    if result.final_path is None:
        logging.info("No usable path in %s", args.path)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
