"""Command-line interface for common substructure reduction."""

import argparse
import logging
import sys
from typing import List, Optional

from ...core.domain.implementations.clique_mcs_oracle import CliqueMCSOracle
from ...core.domain.implementations.rdkit_mcs_oracle import RDKitMCSOracle
from ...core.domain.models.job_type import JobType
from ...core.domain.models.matching_policy import MatchingPolicy
from ...core.services.batch_service import BatchReductionService
from ...infrastructure.adapters.rdkit_adapter import read_smiles_file, to_canonical_smiles

ORACLES = {
    "clique": CliqueMCSOracle,
    "rdkit": RDKitMCSOracle,
}


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """Configure logging."""
    handlers: List[logging.Handler] = [
        logging.StreamHandler() if verbose else logging.NullHandler()
    ]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def setup_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        description="Find the maximum common substructure of a list of molecules"
    )
    parser.add_argument("input", help="SMILES file, one molecule per line")
    parser.add_argument(
        "--job-type",
        choices=[job.value for job in JobType],
        default=JobType.SINGLE.value,
        help="single: one common substructure; multiple: all tied ones",
    )
    parser.add_argument(
        "--vertex",
        choices=["exact", "relaxed"],
        default="exact",
        help="Atom comparison (exact element or any atom)",
    )
    parser.add_argument(
        "--edge",
        choices=["exact", "relaxed"],
        default="exact",
        help="Bond comparison (exact bond type or any bond)",
    )
    parser.add_argument(
        "--match-rings",
        action="store_true",
        help="Ring atoms and bonds only match ring atoms and bonds",
    )
    parser.add_argument(
        "--oracle", choices=sorted(ORACLES), default="clique", help="MCS search backend"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=60.0,
        help="Time limit in seconds for one pairwise search",
    )
    parser.add_argument(
        "--chunk-size", type=int, default=10, help="Molecules per reduction task"
    )
    parser.add_argument("--workers", type=int, default=None, help="Number of workers")
    parser.add_argument(
        "--processes", action="store_true", help="Use processes instead of threads"
    )
    parser.add_argument("--output", "-o", help="Write results here instead of stdout")
    parser.add_argument("--log-file", help="Also write log messages to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the reduction CLI."""
    parser = setup_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.log_file)
    logger = logging.getLogger("mcss")

    graphs = read_smiles_file(args.input)
    if not graphs:
        parser.error(f"No valid molecules found in {args.input}")

    service = BatchReductionService(
        job_type=args.job_type,
        chunk_size=args.chunk_size,
        max_workers=args.workers,
        policy=MatchingPolicy.from_names(args.vertex, args.edge, args.match_rings),
        oracle=ORACLES[args.oracle](timeout=args.timeout),
        use_processes=args.processes,
        show_progress=args.verbose,
    )
    results = service.reduce(graphs)
    logger.info(f"Reduction finished with status {results.status.value}")
    for failure in results.failures:
        logger.warning(f"{failure.stage} step {failure.index}: {failure.kind}: {failure.message}")

    lines = [to_canonical_smiles(graph) for graph in results]
    text = "".join(f"{line}\n" for line in lines)
    if args.output:
        with open(args.output, "w") as f:
            f.write(text)
    else:
        sys.stdout.write(text)

    return 0 if lines else 1


if __name__ == "__main__":
    sys.exit(main())
