"""Sentiment Bayes -- multinomial Naive Bayes text classification."""

__version__ = "0.1.0"

from .classifier import (
    NaiveBayesClassifier,
    evaluate,
    load_snapshot_file,
    normalize_scores,
    save_snapshot,
)
from .dataset import DEMO_SENTENCES, default_dataset, load_csv, split_dataset
from .models import Document, Metrics, Snapshot
from .preprocessing import tokenize

__all__ = [
    # Core
    "NaiveBayesClassifier",
    "Document",
    "Metrics",
    "Snapshot",
    "tokenize",
    "normalize_scores",
    "evaluate",
    # Persistence
    "save_snapshot",
    "load_snapshot_file",
    # Datasets
    "load_csv",
    "split_dataset",
    "default_dataset",
    "DEMO_SENTENCES",
]
