"""
NameOrigin Model Parameters
============================
The four learned tensors of the recurrent cell:

    i2h_weights  (n_letters + n_hidden, n_hidden)   input+hidden → hidden
    i2h_bias     (n_hidden,)
    h2o_weights  (n_hidden, n_categories)           hidden → output
    h2o_bias     (n_categories,)

They are plain leaf tensors with ``requires_grad=True``, not an
``nn.Module``: the cell is written directly against them, and the trainer
is their only writer.

Shapes are fixed when the parameters are built and are checked against each
other on construction.

Usage:
    >>> params = build_model(n_letters=57, n_categories=18, seed=0)
    >>> params.i2h_weights.shape
    torch.Size([185, 128])
    >>> params.n_params
    26130
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

import torch

from nameorigin.errors import ShapeMismatchError

logger = logging.getLogger(__name__)

N_HIDDEN = 128


@dataclass(eq=False)
class ModelParameters:
    """
    Container for the four cell tensors.

    Parameters
    ----------
    i2h_weights : torch.Tensor
        Shape (n_letters + n_hidden, n_hidden).
    i2h_bias : torch.Tensor
        Shape (n_hidden,).
    h2o_weights : torch.Tensor
        Shape (n_hidden, n_categories).
    h2o_bias : torch.Tensor
        Shape (n_categories,).
    """
    i2h_weights: torch.Tensor
    i2h_bias: torch.Tensor
    h2o_weights: torch.Tensor
    h2o_bias: torch.Tensor

    def __post_init__(self):
        if self.i2h_weights.dim() != 2 or self.h2o_weights.dim() != 2:
            raise ShapeMismatchError(
                f"Weight matrices must be 2-D, got i2h_weights "
                f"{tuple(self.i2h_weights.shape)} and h2o_weights "
                f"{tuple(self.h2o_weights.shape)}"
            )

        n_hidden = self.i2h_weights.shape[1]
        expected = {
            "i2h_bias": (n_hidden,),
            "h2o_bias": (self.h2o_weights.shape[1],),
        }
        actual = {
            "i2h_bias": tuple(self.i2h_bias.shape),
            "h2o_bias": tuple(self.h2o_bias.shape),
        }
        if self.i2h_weights.shape[0] <= n_hidden:
            raise ShapeMismatchError(
                f"i2h_weights has {self.i2h_weights.shape[0]} rows; it needs "
                f"n_letters + n_hidden > n_hidden ({n_hidden})"
            )
        if self.h2o_weights.shape[0] != n_hidden:
            raise ShapeMismatchError(
                f"h2o_weights has {self.h2o_weights.shape[0]} rows, "
                f"expected n_hidden={n_hidden}"
            )
        for name, shape in expected.items():
            if actual[name] != shape:
                raise ShapeMismatchError(
                    f"{name} has shape {actual[name]}, expected {shape}"
                )

    @property
    def n_hidden(self) -> int:
        return self.i2h_weights.shape[1]

    @property
    def n_letters(self) -> int:
        return self.i2h_weights.shape[0] - self.n_hidden

    @property
    def n_categories(self) -> int:
        return self.h2o_weights.shape[1]

    @property
    def device(self) -> torch.device:
        return self.i2h_weights.device

    def tensors(self) -> tuple[torch.Tensor, ...]:
        """The four tensors in a fixed order (used for autograd and SGD)."""
        return (self.i2h_weights, self.i2h_bias, self.h2o_weights, self.h2o_bias)

    @property
    def n_params(self) -> int:
        """Total number of scalar parameters."""
        return sum(t.numel() for t in self.tensors())

    def __repr__(self) -> str:
        return (
            f"ModelParameters(n_letters={self.n_letters}, "
            f"n_hidden={self.n_hidden}, n_categories={self.n_categories}, "
            f"params={self.n_params:,}, device={self.device})"
        )


def build_model(
    n_letters: int,
    n_categories: int,
    n_hidden: int = N_HIDDEN,
    init_std: float = 0.1,
    seed: Optional[int] = None,
    device: Union[str, torch.device] = "cpu",
) -> ModelParameters:
    """
    Create freshly initialized model parameters.

    Weights are drawn from N(0, init_std²); biases start at zero.

    Parameters
    ----------
    n_letters : int
        Alphabet size (input width).
    n_categories : int
        Category space size (output width).
    n_hidden : int
        Hidden state length.
    init_std : float
        Standard deviation of the weight initialization.
    seed : int or None
        Seed for a private ``torch.Generator``; None uses the global RNG.
    device : str or torch.device
        Where the tensors live.

    Raises
    ------
    ValueError
        If any dimension is not positive.
    """
    for label, value in (
        ("n_letters", n_letters),
        ("n_categories", n_categories),
        ("n_hidden", n_hidden),
    ):
        if value < 1:
            raise ValueError(f"{label} must be >= 1, got {value}")

    generator = None
    if seed is not None:
        generator = torch.Generator().manual_seed(seed)

    def weights(rows: int, cols: int) -> torch.Tensor:
        w = torch.randn(rows, cols, generator=generator) * init_std
        return w.to(device).requires_grad_(True)

    def bias(size: int) -> torch.Tensor:
        return torch.zeros(size, device=device, requires_grad=True)

    params = ModelParameters(
        i2h_weights=weights(n_letters + n_hidden, n_hidden),
        i2h_bias=bias(n_hidden),
        h2o_weights=weights(n_hidden, n_categories),
        h2o_bias=bias(n_categories),
    )
    logger.info(f"Model built: {params}")
    return params
