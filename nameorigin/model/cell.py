"""
NameOrigin Recurrent Cell
==========================
One timestep of the recurrence, written directly against the parameter
tensors:

    combined   = [input ; hidden]                        (n_letters + n_hidden,)
    new_hidden = sigmoid(combined @ i2h_weights + i2h_bias)      (n_hidden,)
    raw        = sigmoid(new_hidden @ h2o_weights + h2o_bias)    (n_categories,)
    output     = softmax(raw)                                    (n_categories,)

Both nonlinearities are sigmoids, and there is no gating. Note that the
softmax sees values in (0, 1), so the largest probability the cell can ever
assign is e / (e + n_categories - 1).

``step`` is pure: it reads the parameters and returns new tensors.
"""

from __future__ import annotations

import torch

from nameorigin.model.params import ModelParameters


def zero_hidden(params: ModelParameters) -> torch.Tensor:
    """A fresh all-zero hidden state on the parameters' device."""
    return torch.zeros(params.n_hidden, device=params.device)


def step(
    input_vec: torch.Tensor,
    hidden_vec: torch.Tensor,
    params: ModelParameters,
) -> tuple[torch.Tensor, torch.Tensor]:
    """
    Apply the cell to one one-hot letter.

    Parameters
    ----------
    input_vec : torch.Tensor
        One-hot letter, shape (n_letters,).
    hidden_vec : torch.Tensor
        Previous hidden state, shape (n_hidden,).
    params : ModelParameters
        Cell parameters.

    Returns
    -------
    (output, new_hidden)
        Category distribution (n_categories,) summing to 1, and the next
        hidden state (n_hidden,).
    """
    combined = torch.cat((input_vec, hidden_vec), dim=-1)
    new_hidden = torch.sigmoid(combined @ params.i2h_weights + params.i2h_bias)
    raw_output = torch.sigmoid(new_hidden @ params.h2o_weights + params.h2o_bias)
    output = torch.softmax(raw_output, dim=-1)
    return output, new_hidden
