"""CLI entry point for scoring destinations against relocation preferences."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from relocation_advisor.adapters.io.exports import serialize_ranking
from relocation_advisor.adapters.storage.repositories import read_json, write_json
from relocation_advisor.core.config import load_paths
from relocation_advisor.core.errors import ValidationError
from relocation_advisor.core.normalization import build_meta
from relocation_advisor.modules.matching.ranking import rank_destinations

LOG = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Relocation Advisor CLI")
    parser.add_argument("--preferences", type=str, required=True, help="Preferences JSON file")
    parser.add_argument(
        "--destinations",
        type=str,
        required=True,
        help="Destination JSON file (a single object or a list)",
    )
    parser.add_argument("--limit", type=int, default=None, help="Keep only the best N destinations")
    parser.add_argument("--skip-invalid", action="store_true", help="Skip destinations that fail validation")
    parser.add_argument("--output", type=str, default=None, help="Output JSON path")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        preferences = read_json(Path(args.preferences))
        destinations = read_json(Path(args.destinations))
        if isinstance(destinations, dict):
            destinations = [destinations]
        elif not isinstance(destinations, list):
            raise ValidationError(
                f"Destinations must be a JSON object or list, got {type(destinations).__name__}"
            )
        results = rank_destinations(
            preferences,
            destinations,
            skip_invalid=args.skip_invalid,
            limit=args.limit,
        )
    except ValidationError as exc:
        LOG.error("%s", exc)
        return 2

    payload = serialize_ranking(results)
    payload["meta"] = build_meta()
    if args.output:
        output_path = Path(args.output)
    else:
        output_path = load_paths().reports_dir / "recommendations.json"
    write_json(output_path, payload)

    for position, result in enumerate(results, start=1):
        print(f"{position:>3}. {result.destination:<30} {result.score:6.2f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
