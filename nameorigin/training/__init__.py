"""
nameorigin.training - Training Engine
======================================
Single-example SGD for the recurrent classifier.

    ExampleSampler.stream() → Trainer.train_step() × steps → (params, loss history)

Components:
    - trainer.py - Trainer (forward, MSE loss, autograd, in-place SGD,
                   periodic loss reporting) and the functional train()
"""

from nameorigin.training.trainer import Trainer, train
