#!/usr/bin/env python3
"""
NameOrigin Training Script
===========================
Loads the names corpus, trains the recurrent classifier with single-example
SGD, evaluates it on sampled names and writes the loss history and
evaluation summary as JSON.

Usage:
    python scripts/train.py --config configs/default.yaml --data-dir data/names
    python scripts/train.py --smoke-test
    python scripts/train.py --steps 20000 --predict Dovesky Jackson Satoshi
"""

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from nameorigin.config import NameOriginConfig
from nameorigin.data import ExampleSampler, build_registry, load_corpus, Alphabet
from nameorigin.evaluation import (
    Timer,
    average_loss,
    confusion_matrix,
    per_category_accuracy,
    top_categories,
)
from nameorigin.model import build_model
from nameorigin.training import Trainer

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="NameOrigin Training",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Full training:
    python scripts/train.py --config configs/default.yaml

    # Quick smoke test on the bundled mini corpus:
    python scripts/train.py --smoke-test

    # Override steps / learning rate and classify some names afterwards:
    python scripts/train.py --steps 20000 --lr 0.1 --predict Dovesky Jackson
        """,
    )
    parser.add_argument("--config", type=str, default="configs/default.yaml")
    parser.add_argument("--smoke-test", action="store_true")
    parser.add_argument("--data-dir", type=str, default=None)
    parser.add_argument("--steps", type=int, default=None)
    parser.add_argument("--lr", type=float, default=None)
    parser.add_argument(
        "--output", type=str, default="outputs",
        help="Directory for loss_history.json and evaluation.json",
    )
    parser.add_argument(
        "--predict", nargs="*", default=None, metavar="NAME",
        help="Names to classify after training (default: from config)",
    )
    args = parser.parse_args()

    # Load config
    if args.smoke_test:
        config = NameOriginConfig.for_smoke_test()
    else:
        config = NameOriginConfig.from_yaml(args.config)

    if args.data_dir:
        config.data.data_dir = args.data_dir
    if args.steps is not None:
        config.training.steps = args.steps
    if args.lr is not None:
        config.training.learning_rate = args.lr
    config.validate()
    logger.info(f"\n{config}")

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)

    # Data
    alphabet = Alphabet(config.data.symbols)
    corpus = load_corpus(config.data.data_dir, alphabet)
    alphabet, categories = build_registry(corpus, config.data.symbols)
    sampler = ExampleSampler(corpus, alphabet, categories, seed=config.training.seed)

    # Model
    params = build_model(
        n_letters=len(alphabet),
        n_categories=len(categories),
        n_hidden=config.model.n_hidden,
        init_std=config.model.init_std,
        seed=config.training.seed,
        device=config.training.resolve_device(),
    )

    # Train
    trainer = Trainer(
        params,
        learning_rate=config.training.learning_rate,
        report_every=config.training.report_every,
        log_every=config.training.log_every,
        name="nameorigin",
    )
    with Timer("Training"):
        results = trainer.train(sampler.stream(), config.training.steps)

    history = results["loss_history"]
    with open(output_dir / "loss_history.json", "w", encoding="utf-8") as f:
        json.dump({
            "raw": history,
            "smoothed": average_loss(history, window=10),
        }, f, indent=2)

    # Evaluate
    matrix, acc = confusion_matrix(params, sampler, config.evaluation.n_samples)
    per_category = per_category_accuracy(matrix, list(categories))
    for name, value in per_category.items():
        logger.info(f"  {name:<12} {value:.1%}")

    with open(output_dir / "evaluation.json", "w", encoding="utf-8") as f:
        json.dump({
            "accuracy": acc,
            "per_category_accuracy": per_category,
            "categories": list(categories),
            "confusion_matrix": matrix.tolist(),
            "final_loss": results["final_loss"],
            "total_steps": results["total_steps"],
            "total_time_seconds": results["total_time_seconds"],
        }, f, indent=2)

    # Predict
    names = args.predict if args.predict is not None else config.evaluation.predict_names
    for name in names:
        ranked = top_categories(params, name, alphabet, categories, config.evaluation.top_k)
        logger.info(
            f"> {name}: " + ", ".join(f"{cat} ({p:.3f})" for cat, p in ranked)
        )

    logger.info(f"Outputs written to {output_dir}/")


if __name__ == "__main__":
    main()
