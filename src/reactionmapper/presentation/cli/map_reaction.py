"""Command-line interface for reaction atom-atom mapping."""

import argparse
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from ...config import MappingConfig
from ...core.domain.exceptions import MappingError
from ...core.domain.implementations.default_standardizer import DefaultStandardizer
from ...core.domain.implementations.isomorphism_matcher import IsomorphismMatcher
from ...core.domain.implementations.rdkit_mcs_matcher import RDKitMCSMatcher
from ...core.domain.models.mapping_algorithm import MappingAlgorithm
from ...core.domain.models.reaction import Reaction
from ...core.services.be_matrix_builder import build_reaction_matrices
from ...core.services.strategy_orchestrator import StrategyOrchestrator
from ...infrastructure.repositories.reaction_repository import ReactionRepository

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """Configure logging."""
    log_path = Path(log_file) if log_file else Path("logs") / "reactionmapper.log"
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=logging.INFO if verbose else logging.ERROR,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.FileHandler(log_path),
            logging.StreamHandler() if verbose else logging.NullHandler(),
        ],
        force=True,
    )


def setup_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        description="Compute atom-atom mappings of a chemical reaction"
    )
    parser.add_argument(
        "reaction", help="Reaction SMILES (e.g. 'CCO>>CC=O') or path to an RXN file"
    )
    parser.add_argument(
        "--keep-hydrogens",
        action="store_true",
        help="Match with explicit hydrogens instead of stripping them",
    )
    parser.add_argument(
        "--strategy",
        action="append",
        choices=[strategy.label for strategy in MappingAlgorithm],
        help="Strategy to run (repeatable; default: all)",
    )
    parser.add_argument(
        "--matcher",
        choices=["rdkit", "networkx"],
        default="rdkit",
        help="Substructure matcher backend",
    )
    parser.add_argument("--workers", type=int, help="Matching threads per strategy")
    parser.add_argument(
        "--timeout", type=float, help="Seconds allowed for one exhaustive MCS search"
    )
    parser.add_argument("--output-dir", help="Directory for mapped RXN files")
    parser.add_argument(
        "--matrix",
        action="store_true",
        help="Print the reactant BE matrix and bond changes of the best mapping",
    )
    parser.add_argument(
        "--progress", action="store_true", help="Show a progress bar per strategy"
    )
    parser.add_argument("--log-file", help="Log file (default: logs/reactionmapper.log)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    return parser


def build_config(args: argparse.Namespace) -> MappingConfig:
    """Environment defaults overridden by command-line arguments."""
    config = MappingConfig.from_env()
    overrides = {
        "show_progress": args.progress,
        "verbose": config.verbose or args.verbose,
    }
    if args.keep_hydrogens:
        overrides["remove_hydrogens"] = False
    if args.strategy:
        overrides["strategies"] = tuple(
            MappingAlgorithm.from_label(label) for label in dict.fromkeys(args.strategy)
        )
    if args.workers is not None:
        overrides["max_workers"] = args.workers
    if args.timeout is not None:
        overrides["matcher_timeout"] = args.timeout
    return replace(config, **overrides)


def load_reaction(reaction: str, repository: ReactionRepository) -> Reaction:
    if os.path.isfile(reaction):
        return repository.read_rxn(reaction)
    return repository.from_smiles(reaction)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for reaction mapping CLI."""
    parser = setup_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except ValueError as e:
        parser.error(str(e))
    setup_logging(config.verbose, args.log_file)

    if args.matcher == "networkx":
        matcher = IsomorphismMatcher()
    else:
        matcher = RDKitMCSMatcher(timeout=config.matcher_timeout)
    repository = ReactionRepository()
    orchestrator = StrategyOrchestrator(DefaultStandardizer(), matcher, config)

    try:
        reaction = load_reaction(args.reaction, repository)
        solutions = orchestrator.run(reaction)
        if not solutions:
            raise MappingError("No strategy produced a mapping")

        timings = orchestrator.get_timings()
        for strategy, result in solutions.items():
            print(
                f"{strategy.label}: {result.mapped_atoms} mapped atoms "
                f"in {timings.get(strategy, 0.0):.2f}s"
            )
            print(f"  {repository.to_mapped_smiles(result)}")
            if args.output_dir:
                reaction_id = reaction.reaction_id or "reaction"
                repository.write_mapping_rxn(
                    result, args.output_dir, f"{reaction_id}_{strategy.label}.rxn"
                )

        if args.matrix:
            best = max(solutions.values(), key=lambda r: r.mapped_atoms)
            matrices = build_reaction_matrices(best)
            print(f"Reactant BE matrix ({best.strategy.label}):")
            print(matrices.educt)
            print(f"Bond changes: {matrices.changed_bonds}")
    except (MappingError, FileNotFoundError) as e:
        logger.error("Mapping failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
