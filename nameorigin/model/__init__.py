"""
nameorigin.model - Recurrent Network
=====================================
A single-layer, sigmoid-only recurrent classifier written directly against
four parameter tensors (no ``nn.RNN``/``nn.Linear``).

    letter₁ ─┐      letter₂ ─┐            letter_T ─┐
             ▼               ▼                      ▼
    h₀ ──▶ [cell] ──h₁──▶ [cell] ──h₂──▶ ... ──▶ [cell] ──▶ softmax over categories

Components:
    - params.py  - ModelParameters and build_model (the four tensors)
    - cell.py    - step(): one timestep of the recurrence
    - unroll.py  - forward(): folds the cell over a whole word
"""

from nameorigin.model.params import N_HIDDEN, ModelParameters, build_model
from nameorigin.model.cell import step, zero_hidden
from nameorigin.model.unroll import forward
