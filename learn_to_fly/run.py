"""
CLI entry: train a few generations headless and print a short report,
or open the live viewer with --live.
"""
import argparse
import sys

from loguru import logger

from learn_to_fly.errors import LearnToFlyError
from learn_to_fly.logger_setup import setup_logger
from learn_to_fly.runner import train
from learn_to_fly.simulation import SimulationConfig


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Evolve neural-network birds that learn to catch food.")
    parser.add_argument("--generations", type=int, default=10)
    parser.add_argument("--seed", type=int, default=11)
    parser.add_argument("--animals", type=int, default=40)
    parser.add_argument("--foods", type=int, default=60)
    parser.add_argument("--mutation-chance", type=float, default=0.01)
    parser.add_argument("--mutation-coeff", type=float, default=0.3)
    parser.add_argument("--generation-length", type=int, default=2500)
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--live", action="store_true", help="open the matplotlib viewer")
    args = parser.parse_args(argv)

    setup_logger(level=args.log_level, log_file=args.log_file)
    try:
        config = SimulationConfig(
            animals=args.animals,
            foods=args.foods,
            mutation_chance=args.mutation_chance,
            mutation_coeff=args.mutation_coeff,
            generation_length=args.generation_length,
        )
        if args.live:
            from learn_to_fly.viewer import run_live
            run_live(config, seed=args.seed)
            return 0
        history = train(generations=args.generations, seed=args.seed, config=config)
    except LearnToFlyError as exc:
        logger.error("[Run] {}: {}", type(exc).__name__, exc)
        return 1

    for gen, stats in enumerate(history, start=1):
        print(f"generation {gen:>3}: {stats}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
