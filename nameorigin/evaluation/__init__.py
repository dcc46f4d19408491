"""
nameorigin.evaluation - Inference & Metrics
============================================
    - predict.py - predict() distribution and top_categories() ranking
    - metrics.py - confusion matrix, accuracy, loss smoothing, Timer
"""

from nameorigin.evaluation.predict import predict, top_categories
from nameorigin.evaluation.metrics import (
    Timer,
    average_loss,
    confusion_matrix,
    per_category_accuracy,
)
