"""
NameOrigin Configuration System
================================
Centralized configuration for every nameorigin component using Python
dataclasses. Hyperparameters, paths and evaluation settings all live here.

Usage:
    # Load from YAML file:
    >>> config = NameOriginConfig.from_yaml("configs/default.yaml")

    # Create programmatically:
    >>> config = NameOriginConfig(
    ...     model=ModelConfig(n_hidden=64),
    ...     training=TrainingConfig(learning_rate=0.1, steps=20_000),
    ... )

    # Save to YAML:
    >>> config.to_yaml("configs/my_experiment.yaml")

    # Access nested values:
    >>> config.model.n_hidden          # 128
    >>> config.training.report_every   # 1000
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, asdict
from pathlib import Path

import torch
import yaml

from nameorigin.data.registry import ALL_LETTERS

logger = logging.getLogger(__name__)


# =============================================================================
# Model Configuration
# =============================================================================

@dataclass
class ModelConfig:
    """
    Architecture hyperparameters for the recurrent cell.

    The input size (number of letters) and output size (number of
    categories) are not configured here: they are fixed by the alphabet
    and by the corpus.

    Parameters
    ----------
    n_hidden : int
        Length of the hidden state vector threaded through the sequence.

    init_std : float
        Standard deviation of the normal distribution the two weight
        matrices are drawn from. Biases always start at zero.
    """
    n_hidden: int = 128
    init_std: float = 0.1

    def validate(self) -> None:
        """
        Check that all model parameters are valid.

        Raises
        ------
        ValueError
            If any parameter is invalid.
        """
        if self.n_hidden < 1:
            raise ValueError(f"n_hidden must be >= 1, got {self.n_hidden}")
        if self.init_std < 0:
            raise ValueError(f"init_std must be >= 0, got {self.init_std}")

    def n_params(self, n_letters: int, n_categories: int) -> int:
        """Parameter count for a given alphabet and category space."""
        i2h = (n_letters + self.n_hidden) * self.n_hidden + self.n_hidden
        h2o = self.n_hidden * n_categories + n_categories
        return i2h + h2o


# =============================================================================
# Training Configuration
# =============================================================================

@dataclass
class TrainingConfig:
    """
    Hyperparameters for the single-example SGD loop.

    Parameters
    ----------
    learning_rate : float
        Fixed SGD step size. There is no schedule.

    steps : int
        Number of sampled examples (= parameter updates) per run.

    report_every : int
        Record a (step, loss) sample every N steps. Step 0 is always
        recorded.

    log_every : int
        Write a progress line to the log every N steps. 0 disables it.

    seed : int or None
        Seed for both parameter initialization and example sampling.
        None leaves both non-deterministic.

    device : str
        "auto", "cpu", "mps" or "cuda".
    """
    learning_rate: float = 0.05
    steps: int = 100_000
    report_every: int = 1000
    log_every: int = 5000
    seed: int | None = 42
    device: str = "auto"

    def validate(self) -> None:
        """Validate training parameters."""
        if self.learning_rate <= 0:
            raise ValueError(
                f"learning_rate must be positive, got {self.learning_rate}"
            )
        if self.steps < 1:
            raise ValueError(f"steps must be >= 1, got {self.steps}")
        if self.report_every < 1:
            raise ValueError(
                f"report_every must be >= 1, got {self.report_every}"
            )
        if self.log_every < 0:
            raise ValueError(f"log_every must be >= 0, got {self.log_every}")

    def resolve_device(self) -> torch.device:
        """
        Auto-detect the best available device.

        Priority: CUDA > MPS (Apple Silicon) > CPU

        Returns
        -------
        torch.device
            The resolved device.
        """
        if self.device != "auto":
            return torch.device(self.device)

        if torch.cuda.is_available():
            logger.info("Using CUDA device (GPU detected)")
            return torch.device("cuda")
        elif hasattr(torch.backends, "mps") and torch.backends.mps.is_available():
            logger.info("Using MPS device (Apple Silicon detected)")
            return torch.device("mps")
        else:
            logger.info("Using CPU device")
            return torch.device("cpu")


# =============================================================================
# Data Configuration
# =============================================================================

@dataclass
class DataConfig:
    """
    Where the corpus lives and which symbols the alphabet holds.

    Parameters
    ----------
    data_dir : str
        Directory with one ``<Category>.txt`` file per category.

    symbols : str
        Ordered alphabet. Characters outside it are dropped while the
        corpus is normalized.
    """
    data_dir: str = "data/names"
    symbols: str = ALL_LETTERS

    def validate(self) -> None:
        """Validate data parameters."""
        if not self.symbols:
            raise ValueError("symbols must not be empty")
        if len(set(self.symbols)) != len(self.symbols):
            raise ValueError(
                f"symbols must be distinct, got duplicates in {self.symbols!r}"
            )


# =============================================================================
# Evaluation Configuration
# =============================================================================

@dataclass
class EvalConfig:
    """
    Settings for the post-training evaluation.

    Parameters
    ----------
    n_samples : int
        Number of randomly sampled examples for the confusion matrix.

    top_k : int
        How many candidate categories to report per predicted name.

    predict_names : list[str]
        Names to print predictions for after training.
    """
    n_samples: int = 10_000
    top_k: int = 3
    predict_names: list[str] = field(default_factory=lambda: [
        "Dovesky",
        "Jackson",
        "Satoshi",
    ])

    def validate(self) -> None:
        """Validate evaluation parameters."""
        if self.n_samples < 0:
            raise ValueError(f"n_samples must be >= 0, got {self.n_samples}")
        if self.top_k < 1:
            raise ValueError(f"top_k must be >= 1, got {self.top_k}")


# =============================================================================
# Master Configuration
# =============================================================================

@dataclass
class NameOriginConfig:
    """
    Master configuration combining all sub-configurations.

    Usage:
        >>> config = NameOriginConfig.from_yaml("configs/default.yaml")
        >>> config = NameOriginConfig()
        >>> config.validate()
        >>> config.to_yaml("configs/my_experiment.yaml")
    """
    model: ModelConfig = field(default_factory=ModelConfig)
    training: TrainingConfig = field(default_factory=TrainingConfig)
    data: DataConfig = field(default_factory=DataConfig)
    evaluation: EvalConfig = field(default_factory=EvalConfig)

    def validate(self) -> None:
        """
        Validate all sub-configurations and cross-config consistency.

        Raises
        ------
        ValueError
            If any parameter is invalid or configs are inconsistent.
        """
        self.model.validate()
        self.training.validate()
        self.data.validate()
        self.evaluation.validate()

        if self.training.report_every > self.training.steps:
            raise ValueError(
                f"report_every ({self.training.report_every}) is larger than "
                f"steps ({self.training.steps}); only step 0 would be reported."
            )

        logger.info(
            f"Config validated: n_hidden={self.model.n_hidden}, "
            f"steps={self.training.steps}, lr={self.training.learning_rate}, "
            f"device={self.training.device}"
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> NameOriginConfig:
        """
        Load configuration from a YAML file.

        Parameters
        ----------
        path : str or Path
            Path to the YAML configuration file.

        Returns
        -------
        NameOriginConfig
            Loaded and validated configuration.

        Raises
        ------
        FileNotFoundError
            If the YAML file does not exist.
        yaml.YAMLError
            If the YAML file is malformed.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(
                f"Config file not found: {path}. "
                f"Create one from configs/default.yaml as a template."
            )

        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)

        if raw is None:
            raise ValueError(f"Config file is empty: {path}")

        config = cls(
            model=ModelConfig(**raw.get("model", {})),
            training=TrainingConfig(**raw.get("training", {})),
            data=DataConfig(**raw.get("data", {})),
            evaluation=EvalConfig(**raw.get("evaluation", {})),
        )

        config.validate()
        return config

    def to_yaml(self, path: str | Path) -> None:
        """
        Save configuration to a YAML file.

        Creates parent directories if they don't exist.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(
                asdict(self),
                f,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )

        logger.info(f"Config saved to {path}")

    def to_dict(self) -> dict:
        """Convert to nested dictionary."""
        return asdict(self)

    @classmethod
    def for_smoke_test(cls) -> NameOriginConfig:
        """
        Create a minimal configuration for quick smoke testing.

        Small hidden state and a few hundred steps on CPU, so a full run
        finishes in seconds.
        """
        return cls(
            model=ModelConfig(n_hidden=16, init_std=0.1),
            training=TrainingConfig(
                learning_rate=0.1,
                steps=200,
                report_every=20,
                log_every=50,
                seed=42,
                device="cpu",
            ),
            data=DataConfig(data_dir="data_smoke/names"),
            evaluation=EvalConfig(
                n_samples=100,
                top_k=2,
                predict_names=["Smith"],
            ),
        )

    def __repr__(self) -> str:
        """Pretty-print the configuration."""
        lines = [
            "NameOriginConfig(",
            f"  Model:    n_hidden={self.model.n_hidden}, "
            f"init_std={self.model.init_std}",
            f"  Training: lr={self.training.learning_rate}, "
            f"steps={self.training.steps}, "
            f"report_every={self.training.report_every}, "
            f"seed={self.training.seed}",
            f"  Data:     {self.data.data_dir} "
            f"({len(self.data.symbols)} symbols)",
            f"  Device:   {self.training.device}",
            ")",
        ]
        return "\n".join(lines)
