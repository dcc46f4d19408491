"""
NameOrigin Trainer
===================
Single-example stochastic gradient descent over the hand-written recurrent
cell.

Every step walks the same fixed sequence of stages:

    Sampling  → take the next TrainingExample from the stream
    Forward   → unroll the cell over the word (one output distribution)
    Loss      → mean-squared error against the one-hot category
    Backward  → torch.autograd.grad through the whole unrolled graph
    Update    → p -= learning_rate * grad, in place, for all four tensors
    Report    → every `report_every` steps, record (step, loss)

There is exactly one example per step. Words have different lengths and
are never padded into a common batch, so a batched word tensor is rejected
with ShapeMismatchError. That error ends the run; it is not retried.

The recorded (step, loss) samples are returned to the caller instead of
being pushed to some global metrics store.

Usage:
    >>> params = build_model(len(alphabet), len(categories), seed=0)
    >>> sampler = ExampleSampler(corpus, alphabet, categories, seed=0)
    >>> params, history = train(
    ...     params, sampler.stream(), steps=100_000,
    ...     learning_rate=0.05, report_every=1000,
    ... )
    >>> [step for step, _ in history[:3]]
    [0, 1000, 2000]
"""

from __future__ import annotations

import logging
import time
from typing import Iterable, Union

import torch
import torch.nn.functional as F

from nameorigin.data.sampler import TrainingExample
from nameorigin.errors import ShapeMismatchError
from nameorigin.model.params import ModelParameters
from nameorigin.model.unroll import forward

logger = logging.getLogger(__name__)

Example = Union[TrainingExample, tuple[torch.Tensor, torch.Tensor]]


class Trainer:
    """
    Owns the model parameters for the duration of a run and is the only
    code that writes to them.

    Parameters
    ----------
    params : ModelParameters
        Parameters to train in place.
    learning_rate : float
        Fixed SGD step size.
    report_every : int
        Record the loss on every step index divisible by this (step 0
        included).
    log_every : int
        Write a progress line every N steps. 0 disables progress logging.
    name : str
        Human-readable name for this run (for logging).
    """

    def __init__(
        self,
        params: ModelParameters,
        learning_rate: float,
        report_every: int = 1000,
        log_every: int = 0,
        name: str = "trainer",
    ):
        if learning_rate <= 0:
            raise ValueError(f"learning_rate must be positive, got {learning_rate}")
        if report_every < 1:
            raise ValueError(f"report_every must be >= 1, got {report_every}")
        if log_every < 0:
            raise ValueError(f"log_every must be >= 0, got {log_every}")

        for tensor in params.tensors():
            if not tensor.requires_grad:
                raise ValueError(
                    "All model parameters must have requires_grad=True. "
                    "Use build_model() or call requires_grad_() on each tensor."
                )

        self.params = params
        self.learning_rate = learning_rate
        self.report_every = report_every
        self.log_every = log_every
        self.name = name
        self.device = params.device
        self.global_step = 0

        logger.info(
            f"Trainer '{name}' initialized on {self.device} with "
            f"{params.n_params:,} trainable parameters, lr={learning_rate}"
        )

    def _unpack(self, example: Example) -> tuple[torch.Tensor, torch.Tensor]:
        """Split an example into (word_tensor, category_tensor) on the device."""
        if isinstance(example, TrainingExample):
            word_tensor, target = example.word_tensor, example.category_tensor
        else:
            word_tensor, target = example

        if target.dim() != 1 or target.shape[0] != self.params.n_categories:
            raise ShapeMismatchError(
                f"Category tensor must have shape ({self.params.n_categories},), "
                f"got {tuple(target.shape)}. Train one example per step."
            )
        return word_tensor.to(self.device), target.to(self.device)

    def train_step(self, example: Example) -> float:
        """
        Run forward, loss, backward and update for one example.

        Returns
        -------
        float
            The loss before the update.
        """
        word_tensor, target = self._unpack(example)

        # Forward
        output = forward(word_tensor, self.params)

        # Loss
        loss = F.mse_loss(output, target)

        # Backward
        tensors = self.params.tensors()
        grads = torch.autograd.grad(loss, tensors)

        # Update
        with torch.no_grad():
            for tensor, grad in zip(tensors, grads):
                tensor.sub_(self.learning_rate * grad)

        self.global_step += 1
        return loss.item()

    def train(self, example_stream: Iterable[Example], steps: int) -> dict:
        """
        Train for exactly ``steps`` examples drawn from ``example_stream``.

        Parameters
        ----------
        example_stream : iterable
            TrainingExample objects or (word_tensor, category_tensor) pairs.
        steps : int
            Number of steps to run.

        Returns
        -------
        dict
            Training results containing:
            - loss_history: list of (step_index, loss) samples
            - final_loss: loss of the last step
            - total_steps: steps run
            - total_time_seconds: wall-clock time

        Raises
        ------
        ValueError
            If ``steps`` < 1 or the stream runs out early.
        """
        if steps < 1:
            raise ValueError(f"steps must be >= 1, got {steps}")

        logger.info(
            f"[{self.name}] Starting training: {steps:,} steps, "
            f"report_every={self.report_every}"
        )

        history: list[tuple[int, float]] = []
        window_loss = 0.0
        window_steps = 0
        loss = float("nan")
        start_time = time.time()
        window_start = start_time

        stream = iter(example_stream)
        for step_index in range(steps):
            # Sampling
            try:
                example = next(stream)
            except StopIteration:
                raise ValueError(
                    f"Example stream ran out after {step_index} of {steps} steps."
                ) from None

            loss = self.train_step(example)
            window_loss += loss
            window_steps += 1

            # Report
            if step_index % self.report_every == 0:
                history.append((step_index, loss))

            if self.log_every > 0 and (step_index + 1) % self.log_every == 0:
                now = time.time()
                rate = window_steps / max(now - window_start, 1e-9)
                logger.info(
                    f"[{self.name}] step={step_index + 1}/{steps} "
                    f"({(step_index + 1) / steps:.0%}), "
                    f"avg_loss={window_loss / window_steps:.4f}, "
                    f"{rate:.0f} steps/s"
                )
                window_loss, window_steps, window_start = 0.0, 0, now

        total_time = time.time() - start_time
        logger.info(
            f"[{self.name}] Training complete in {total_time:.1f}s: "
            f"final_loss={loss:.4f}, {len(history)} loss samples"
        )

        return {
            "loss_history": history,
            "final_loss": loss,
            "total_steps": steps,
            "total_time_seconds": total_time,
        }

    def __repr__(self) -> str:
        return f"Trainer(name={self.name}, device={self.device}, step={self.global_step})"


def train(
    params: ModelParameters,
    example_stream: Iterable[Example],
    steps: int,
    learning_rate: float,
    report_every: int,
    log_every: int = 0,
) -> tuple[ModelParameters, list[tuple[int, float]]]:
    """
    Train ``params`` in place and return them with the loss samples.

    Returns
    -------
    (ModelParameters, list of (step_index, loss))
    """
    trainer = Trainer(
        params,
        learning_rate=learning_rate,
        report_every=report_every,
        log_every=log_every,
    )
    results = trainer.train(example_stream, steps)
    return params, results["loss_history"]
