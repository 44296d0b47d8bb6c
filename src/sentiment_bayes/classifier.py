"""Multinomial Naive Bayes sentiment classifier.

Counts-based model trained one document at a time:

- Incremental frequency accounting (per-label document and token counts)
- Laplace (add-one) smoothing over the full training vocabulary
- Log-sum-exp normalization of class scores into a probability distribution
- Accuracy and confusion-matrix evaluation on held-out documents
- Snapshot persistence (JSON) for reuse without retraining

The model is a plain mutable object and is not thread-safe. Callers that
share one instance across threads must not train it after publishing it.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .models import Document, Metrics, Snapshot, copy_counts, copy_nested_counts
from .preprocessing import tokenize

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Multinomial Naive Bayes
# ---------------------------------------------------------------------------

@dataclass
class NaiveBayesClassifier:
    """Multinomial Naive Bayes over raw token counts.

    Every lookup during scoring treats a missing label or token as a zero
    count and never inserts it, so snapshots stay minimal.

    Example::

        nb = NaiveBayesClassifier()
        nb.train("great and wonderful", "positive")
        nb.train("terrible and awful", "negative")

        label, probabilities = nb.predict("wonderful")
        print(label)                       # "positive"
        print(probabilities["positive"])   # 0.667
    """

    class_doc_counts: Optional[dict[str, int]] = field(default_factory=dict)
    class_word_counts: Optional[dict[str, dict[str, int]]] = field(default_factory=dict)
    class_total_words: Optional[dict[str, int]] = field(default_factory=dict)
    vocabulary: set[str] = field(default_factory=set)
    total_docs: int = 0

    @property
    def classes(self) -> list[str]:
        """Labels seen during training, sorted."""
        return sorted(self.class_doc_counts or {})

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def train(self, text: str, label: str) -> None:
        """Add one labeled document to the counts.

        The document is counted even if it yields no tokens. Empty labels
        are an ordinary class.
        """
        if self.class_doc_counts is None:
            self.class_doc_counts = {}
        if self.class_word_counts is None:
            self.class_word_counts = {}
        if self.class_total_words is None:
            self.class_total_words = {}

        self.total_docs += 1
        self.class_doc_counts[label] = self.class_doc_counts.get(label, 0) + 1

        word_counts = self.class_word_counts.get(label)
        if word_counts is None:
            word_counts = self.class_word_counts[label] = {}

        for token in tokenize(text):
            if not token:
                continue
            self.vocabulary.add(token)
            word_counts[token] = word_counts.get(token, 0) + 1
            self.class_total_words[label] = self.class_total_words.get(label, 0) + 1

    def train_batch(self, documents: Iterable[Document]) -> None:
        """Train on every document, in order."""
        for doc in documents:
            self.train(doc.text, doc.label)

    def reset(self) -> None:
        """Forget everything learned so far."""
        self.class_doc_counts = {}
        self.class_word_counts = {}
        self.class_total_words = {}
        self.vocabulary = set()
        self.total_docs = 0
        logger.debug("Classifier reset")

    # ------------------------------------------------------------------
    # Prediction
    # ------------------------------------------------------------------

    def predict(self, text: str) -> tuple[str, dict[str, float]]:
        """Classify text and return ``(label, probabilities)``.

        Classes are scored in ascending label order and a later class only
        wins on a strictly greater score, so exact ties go to the
        lexicographically smallest label.

        An untrained model returns ``("", {})``.
        """
        scores = self._compute_log_scores(tokenize(text))
        if not scores:
            return "", {}

        best_label = max(scores, key=scores.get)  # type: ignore[arg-type]
        return best_label, normalize_scores(scores, scores[best_label])

    def _compute_log_scores(self, tokens: list[str]) -> dict[str, float]:
        """Compute unnormalized log posterior scores for each class."""
        doc_counts = self.class_doc_counts or {}
        word_counts = self.class_word_counts or {}
        total_words = self.class_total_words or {}
        vocab_size = len(self.vocabulary)

        # Only reachable through a hand-edited snapshot.
        total_docs = self.total_docs
        if total_docs <= 0:
            total_docs = sum(count for count in doc_counts.values() if count > 0)

        scores: dict[str, float] = {}
        for label in sorted(doc_counts):
            doc_count = doc_counts[label]
            if doc_count <= 0:
                continue

            score = math.log(doc_count / total_docs)
            counts = word_counts.get(label) or {}
            denominator = total_words.get(label, 0) + vocab_size
            if denominator > 0:
                for token in tokens:
                    if not token:
                        continue
                    score += math.log((counts.get(token, 0) + 1) / denominator)

            scores[label] = score
        return scores

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def snapshot(self) -> Snapshot:
        """Return a deep copy of the learned state."""
        return Snapshot(
            class_doc_counts=copy_counts(self.class_doc_counts),
            class_word_counts=copy_nested_counts(self.class_word_counts),
            class_total_words=copy_counts(self.class_total_words),
            vocabulary=sorted(self.vocabulary),
            total_docs=self.total_docs,
        )

    def load_snapshot(self, snapshot: Snapshot) -> None:
        """Replace the learned state with a copy of ``snapshot``.

        Nothing from the previous state is kept.
        """
        self.class_doc_counts = copy_counts(snapshot.class_doc_counts)
        self.class_word_counts = copy_nested_counts(snapshot.class_word_counts)
        self.class_total_words = copy_counts(snapshot.class_total_words)
        self.vocabulary = set(snapshot.vocabulary or ())
        self.total_docs = snapshot.total_docs
        logger.debug(
            "Loaded snapshot with %d classes and %d tokens",
            len(self.class_doc_counts or {}),
            len(self.vocabulary),
        )

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot) -> "NaiveBayesClassifier":
        """Build a new classifier from a snapshot."""
        nb = cls()
        nb.load_snapshot(snapshot)
        return nb


def normalize_scores(scores: dict[str, float], best_score: float) -> dict[str, float]:
    """Turn log scores into probabilities that sum to one.

    Scores are shifted by ``best_score`` before exponentiating. If the
    exponentials sum to exactly zero they are returned un-normalized.
    """
    if not scores:
        return {}

    normalized = {label: math.exp(score - best_score) for label, score in scores.items()}
    total = sum(normalized.values())
    if total == 0:
        return normalized
    return {label: value / total for label, value in normalized.items()}


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

def evaluate(classifier: NaiveBayesClassifier, documents: Iterable[Document]) -> Metrics:
    """Run the classifier over labeled documents and tabulate the results.

    Does no training; split and train the classifier beforehand.

    Args:
        classifier: A trained classifier.
        documents: Held-out labeled documents.

    Returns:
        Metrics with totals and a ``{actual: {predicted: count}}`` table.
    """
    metrics = Metrics()
    for doc in documents:
        predicted, _ = classifier.predict(doc.text)
        metrics.total += 1
        if predicted == doc.label:
            metrics.correct += 1
        row = metrics.confusion.setdefault(doc.label, {})
        row[predicted] = row.get(predicted, 0) + 1
    return metrics


# ---------------------------------------------------------------------------
# Snapshot files
# ---------------------------------------------------------------------------

def save_snapshot(classifier: NaiveBayesClassifier, path: str | Path) -> None:
    """Write the classifier's snapshot to a JSON file.

    Args:
        classifier: Classifier to persist.
        path: Destination file. Parent directories are created.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(classifier.snapshot().to_dict(), f, indent=2, ensure_ascii=False)
    logger.info("Snapshot saved to %s", path)


def load_snapshot_file(classifier: NaiveBayesClassifier, path: str | Path) -> None:
    """Replace the classifier's state with a snapshot read from disk.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a valid snapshot document.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"decode snapshot: {e}") from e

    try:
        snapshot = Snapshot.from_dict(data)
    except ValueError as e:
        raise ValueError(f"decode snapshot: {e}") from e

    classifier.load_snapshot(snapshot)
    logger.info("Loaded snapshot from %s", path)
