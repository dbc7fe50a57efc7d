from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pyregress.config import RunConfig
from pyregress.core.exceptions import PyRegressError
from pyregress.core.logging import setup_logging
from pyregress.core.rows import DEFAULT_CHUNKSIZE, CSVRowSource
from pyregress.core.timing import timed
from pyregress.regression import AccuracySolution, TrainingSolution, evaluate, train
from pyregress.regression.solvers import DEFAULT_TARGET

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyregress",
        description=(
            "Train an additive per-predictor regression on a CSV file, "
            "then predict the target and report accuracy."
        ),
    )
    parser.add_argument("train_path", type=Path, help="CSV file to train on.")
    parser.add_argument(
        "predict_path",
        type=Path,
        nargs="?",
        default=None,
        help="CSV file to predict (defaults to the training file).",
    )
    parser.add_argument(
        "--target",
        default=DEFAULT_TARGET,
        help=f"Name of the target column (default: {DEFAULT_TARGET}).",
    )
    parser.add_argument(
        "--chunksize",
        type=int,
        default=DEFAULT_CHUNKSIZE,
        help="Lines parsed per chunk while streaming the CSV files.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every TRAIN and PREDICT sample.",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> RunConfig:
    return RunConfig(
        train_path=args.train_path,
        predict_path=args.predict_path,
        target=args.target,
        chunksize=args.chunksize,
        verbose=args.verbose,
    )


def run(config: RunConfig) -> tuple[TrainingSolution, AccuracySolution]:
    """Training pass over train_path, then a prediction pass over prediction_path."""
    with timed() as timer:
        logger.info("Training", extra={"file_path": str(config.train_path), "target": config.target})
        trained = train(
            CSVRowSource.from_file(config.train_path, chunksize=config.chunksize),
            target=config.target,
        )

        logger.info("Predicting", extra={"file_path": str(config.prediction_path)})
        scored = evaluate(
            trained.model,
            CSVRowSource.from_file(config.prediction_path, chunksize=config.chunksize),
            target=config.target,
        )
    logger.info("Run complete", extra={"seconds": f"{timer.result()['total_seconds']:.3f}"})
    return trained, scored


def report(trained: TrainingSolution, scored: AccuracySolution) -> str:
    return "\n".join(["", trained.summary(), "", scored.summary()])


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = config_from_args(args)
    setup_logging(logging.DEBUG if config.verbose else logging.INFO)

    try:
        trained, scored = run(config)
    except (PyRegressError, OSError) as e:
        logger.error("%s", e)
        sys.exit(1)

    print(report(trained, scored))


if __name__ == "__main__":
    main()
