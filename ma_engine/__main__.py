"""CLI entry point for the VAR acquisition engine."""

import argparse
import asyncio
import csv
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from ma_engine.config import settings
from ma_engine.errors import EngineError
from ma_engine.models import (
    AcquisitionCriteria,
    ExplanationPayload,
    ScenarioRequest,
    ScenarioResult,
    ScoredVar,
    UnifiedVar,
    DEFAULT_CRITERIA,
)
from ma_engine.models.database import init_db
from ma_engine.service import MaEngine
from ma_engine.sources import CandidateSource, DatabaseSource, StaticSource, sample_vars

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def load_candidates(path: Path) -> list[UnifiedVar]:
    """Load candidate VARs from a JSON array file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return [UnifiedVar(**item) for item in data]


def load_criteria(path: Optional[Path]) -> AcquisitionCriteria:
    """Load criteria from JSON file, or the defaults."""
    if path is None:
        return DEFAULT_CRITERIA
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return AcquisitionCriteria(**data)


def build_source(args: argparse.Namespace) -> CandidateSource:
    if args.candidates:
        return StaticSource(load_candidates(args.candidates))
    if args.sample:
        logger.info("Using built-in sample VARs")
        return StaticSource(sample_vars())
    return DatabaseSource(init_db())


def export_to_csv(results: list[ScoredVar], output_path: Path):
    """Export rankings to CSV file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)

        # Header
        writer.writerow([
            "Rank",
            "Name",
            "State",
            "Revenue ($M)",
            "Composite",
            "Revenue Fit",
            "Geographic Fit",
            "Specialty Fit",
            "Culture Fit",
            "Customer Overlap",
            "Vendor Synergy",
            "Growth Trajectory",
            "Margin Profile",
            "Imputed",
            "Reasoning",
        ])

        # Data rows
        for r in results:
            writer.writerow([
                r.rank,
                r.var.name,
                r.var.hq_state,
                r.var.annual_revenue if r.var.annual_revenue is not None else "",
                f"{r.composite_score:.2f}",
                *(f"{score:.1f}" for _, score in r.scores.items()),
                "; ".join(d.value for d in r.imputed_dimensions),
                r.reasoning or "",
            ])


def print_rankings(results: list[ScoredVar], limit: int = 10):
    """Print a summary of rankings to console."""
    print("\n" + "=" * 60)
    print("VAR ACQUISITION RANKINGS")
    print("=" * 60)
    print(f"\nTotal VARs scored: {len(results)}")

    for r in results[:limit]:
        print(f"\n#{r.rank} {r.var.name}")
        print(f"   Composite: {r.composite_score:.2f}")
        if r.var.hq_state:
            print(f"   HQ: {r.var.hq_city}, {r.var.hq_state}")
        if r.reasoning:
            print(f"   Why: {r.reasoning}")

    print("\n" + "=" * 60)


def print_explanation(payload: ExplanationPayload):
    print(f"\n{payload.summary}\n")
    for entry in payload.breakdown:
        flag = " (imputed)" if entry.imputed else ""
        print(
            f"  {entry.label:<18} {entry.score:5.1f} x {entry.weight:.2f} = "
            f"{entry.contribution:5.2f}{flag}  {entry.reasoning}"
        )
    if payload.strengths:
        print("\nStrengths:")
        for s in payload.strengths:
            print(f"  + {s}")
    if payload.concerns:
        print("\nConcerns:")
        for c in payload.concerns:
            print(f"  - {c}")


def print_scenario(result: ScenarioResult):
    print(f"\n{result.name}")
    print(f"  Combined revenue:   ${result.combined_revenue:,.1f}M")
    print(f"  Combined EBITDA:    ${result.combined_ebitda:,.1f}M")
    print(
        f"  Valuation:          ${result.estimated_valuation:,.1f}M "
        f"(${result.estimated_price_range.low:,.1f}M - ${result.estimated_price_range.high:,.1f}M)"
    )
    print(f"  Cross-sell revenue: ${result.cross_sell_revenue:,.1f}M")
    print(f"  Margin gain:        ${result.margin_gain:,.1f}M")
    print(f"  Integration cost:   ${result.integration_cost:,.1f}M")
    print(f"  Projected ROI:      {result.projected_roi:.1f}%")
    print(f"  Capability gains:   {', '.join(result.capability_gains) or 'none'}")
    print(f"  Vendor overlaps:    {', '.join(result.vendor_overlaps) or 'none'}")


async def run(args: argparse.Namespace):
    if args.command == "seed":
        count = DatabaseSource(init_db()).save(sample_vars())
        logger.info(f"Seeded {count} sample VARs into {settings.db_path}")
        return

    engine = MaEngine(build_source(args))
    criteria = load_criteria(args.criteria)

    if args.command == "rank":
        results = await engine.compute_rankings(criteria)
        if args.output:
            export_to_csv(results, args.output)
            logger.info(f"Rankings exported to {args.output}")
        print_rankings(results, limit=args.top)

    elif args.command == "explain":
        payload = await engine.explain(args.var_id, criteria)
        print_explanation(payload)

    elif args.command == "simulate":
        request = ScenarioRequest(
            name=args.name,
            target_var_ids=args.var_ids,
            ebitda_multiple=args.multiple,
        )
        print_scenario(await engine.simulate(request))


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="VAR Acquisition Engine - Score, rank and simulate acquisition targets"
    )
    parser.add_argument(
        "--candidates",
        type=Path,
        help="JSON file of candidate VARs (default: read from the database)",
    )
    parser.add_argument(
        "--sample",
        action="store_true",
        help="Use the built-in sample VARs",
    )
    parser.add_argument(
        "--criteria", "-c",
        type=Path,
        help="Path to criteria JSON file (default: built-in acquisition profile)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    rank_parser = subparsers.add_parser("rank", help="Score and rank VARs")
    rank_parser.add_argument("--output", "-o", type=Path, help="Export rankings to CSV")
    rank_parser.add_argument("--top", type=int, default=10, help="Rows to print (default: 10)")

    explain_parser = subparsers.add_parser("explain", help="Explain one VAR's score")
    explain_parser.add_argument("var_id", type=int)

    simulate_parser = subparsers.add_parser("simulate", help="Simulate an acquisition")
    simulate_parser.add_argument("var_ids", type=int, nargs="+")
    simulate_parser.add_argument("--multiple", "-m", type=float, default=7.0, help="EBITDA multiple")
    simulate_parser.add_argument("--name", help="Scenario name")

    subparsers.add_parser("seed", help="Load the sample VARs into the database")

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        asyncio.run(run(args))
    except (EngineError, ValueError, OSError) as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
