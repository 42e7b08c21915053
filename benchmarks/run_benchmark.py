"""Benchmark comparing all six optimizers on all seven benchmark functions.

Every algorithm runs with its default parameters on every function over a
fixed set of seeds. Results are written as JSON and summarized as a table of
mean +/- std best objective value.

Usage:
    uv run python benchmarks/run_benchmark.py
"""

import json
import logging
import sys
from collections import defaultdict
from datetime import UTC, datetime
from pathlib import Path

# Add project src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

import numpy as np

from evo_arena.registry import get_default_parameters, list_algorithms
from evo_arena.runner import run_once

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


# Experiment parameters
DIMENSION = 10
N_RUNS = 10
SEEDS = list(range(N_RUNS))
PROBLEM_IDS = ["sphere", "rastrigin", "rosenbrock", "ackley", "schwefel222", "schwefel12", "step"]
ALGORITHM_IDS = list_algorithms()


def run_benchmark() -> dict:
    """Run the full benchmark suite.

    Returns:
        Dictionary containing metadata and results.
    """
    timestamp = datetime.now(UTC).isoformat()

    metadata = {
        "timestamp": timestamp,
        "parameters": {
            "dimension": DIMENSION,
            "n_runs": N_RUNS,
            "seeds": SEEDS,
            "algorithms": {
                algorithm_id: repr(get_default_parameters(algorithm_id)) for algorithm_id in ALGORITHM_IDS
            },
        },
    }

    results = []

    total_runs = len(PROBLEM_IDS) * len(ALGORITHM_IDS) * N_RUNS
    current_run = 0

    for problem_id in PROBLEM_IDS:
        for algorithm_id in ALGORITHM_IDS:
            for seed in SEEDS:
                current_run += 1
                logger.info(f"Running [{current_run}/{total_runs}]: {algorithm_id} on {problem_id} (seed={seed})")

                result = run_once(algorithm_id, problem_id, dimension=DIMENSION, seed=seed)
                results.append(result.to_dict())

                logger.info(
                    f"  Best: {result.best_objective:.6g}, Generations: {result.generations}, "
                    f"Time: {result.elapsed_seconds:.2f}s"
                )

    return {"metadata": metadata, "results": results}


def print_summary(results: dict) -> None:
    """Print a summary table of the benchmark results.

    Args:
        results: The benchmark results dictionary.
    """
    data = defaultdict(lambda: defaultdict(list))
    time_data = defaultdict(lambda: defaultdict(list))

    for r in results["results"]:
        data[r["problem"]][r["algorithm"]].append(r["best_objective"])
        time_data[r["problem"]][r["algorithm"]].append(r["time_seconds"])

    # Print header
    print("\n" + "=" * 100)
    print("BENCHMARK SUMMARY (best objective, lower is better)")
    print("=" * 100)
    print(f"\nParameters: dimension={DIMENSION}, runs={N_RUNS}, default algorithm parameters")
    print()

    header = f"{'Problem':<12}"
    for algorithm_id in ALGORITHM_IDS:
        header += f"{algorithm_id:>24}"
    print(header)
    print("-" * (12 + 24 * len(ALGORITHM_IDS)))

    for problem_id in PROBLEM_IDS:
        row = f"{problem_id:<12}"
        for algorithm_id in ALGORITHM_IDS:
            values = data[problem_id][algorithm_id]
            if values:
                row += f"{np.mean(values):>13.3e} +/- {np.std(values):.1e}"
            else:
                row += f"{'N/A':>24}"
        print(row)

    print("-" * (12 + 24 * len(ALGORITHM_IDS)))

    # Print timing summary
    print("\nTiming (mean seconds per run):")
    header = f"{'Problem':<12}"
    for algorithm_id in ALGORITHM_IDS:
        header += f"{algorithm_id:>10}"
    print(header)
    print("-" * (12 + 10 * len(ALGORITHM_IDS)))

    for problem_id in PROBLEM_IDS:
        row = f"{problem_id:<12}"
        for algorithm_id in ALGORITHM_IDS:
            times = time_data[problem_id][algorithm_id]
            row += f"{np.mean(times):>10.2f}" if times else f"{'N/A':>10}"
        print(row)

    print()


def main() -> None:
    """Main entry point for the benchmark."""
    logger.info("Starting evo-arena benchmark suite")
    logger.info(f"Parameters: dimension={DIMENSION}, runs={N_RUNS}, algorithms={ALGORITHM_IDS}")

    results = run_benchmark()

    # Save results to JSON
    output_path = Path(__file__).parent / "results" / "benchmark_results.json"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        json.dump(results, f, indent=2)

    logger.info(f"Results saved to {output_path}")

    print_summary(results)


if __name__ == "__main__":
    main()
