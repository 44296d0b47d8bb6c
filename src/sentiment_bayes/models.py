"""Data models for sentiment classification."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Document:
    """A single labeled text sample."""

    text: str
    label: str


@dataclass
class Metrics:
    """Evaluation counts for a labeled test set.

    Attributes:
        total: Number of documents evaluated.
        correct: Number of documents whose predicted label matched.
        confusion: Nested counts of ``{actual: {predicted: count}}``.
    """

    total: int = 0
    correct: int = 0
    confusion: dict[str, dict[str, int]] = field(default_factory=dict)

    @property
    def accuracy(self) -> float:
        """Fraction of correct predictions in [0, 1]."""
        if self.total == 0:
            return 0.0
        return self.correct / self.total

    @property
    def labels(self) -> list[str]:
        """Every label seen as either actual or predicted, sorted."""
        seen = set(self.confusion)
        for predicted in self.confusion.values():
            seen.update(predicted)
        return sorted(seen)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "correct": self.correct,
            "accuracy": round(self.accuracy, 4),
            "confusion": {
                actual: dict(sorted(predicted.items()))
                for actual, predicted in sorted(self.confusion.items())
            },
        }

    def summary(self) -> str:
        """Human-readable summary of accuracy and the confusion matrix."""
        lines = [
            f"Accuracy: {self.accuracy:.2%} ({self.correct}/{self.total})",
            "Confusion matrix (actual -> predicted counts):",
        ]
        for actual in sorted(self.confusion):
            counts = " ".join(
                f"{label}:{count}"
                for label, count in sorted(self.confusion[actual].items())
            )
            lines.append(f"  {actual} -> {counts}")
        return "\n".join(lines)


@dataclass
class Snapshot:
    """Flat, serializable copy of a trained classifier.

    ``None`` mappings are kept as ``None`` so that a snapshot survives a
    round trip through :meth:`to_dict` / :meth:`from_dict` unchanged.

    Attributes:
        class_doc_counts: Documents seen per label.
        class_word_counts: Token occurrences per label.
        class_total_words: Total token occurrences per label.
        vocabulary: Every distinct token, sorted ascending.
        total_docs: Documents seen across all labels.
    """

    class_doc_counts: Optional[dict[str, int]] = None
    class_word_counts: Optional[dict[str, dict[str, int]]] = None
    class_total_words: Optional[dict[str, int]] = None
    vocabulary: Optional[list[str]] = None
    total_docs: int = 0

    def to_dict(self) -> dict:
        """Serialize to the JSON wire shape."""
        return {
            "class_doc_counts": copy_counts(self.class_doc_counts),
            "class_word_counts": copy_nested_counts(self.class_word_counts),
            "class_total_words": copy_counts(self.class_total_words),
            "vocabulary": list(self.vocabulary) if self.vocabulary is not None else None,
            "total_docs": self.total_docs,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Snapshot":
        """Deserialize from the JSON wire shape.

        Absent keys and ``null`` values are both read as ``None``
        (``0`` for ``total_docs``).

        Raises:
            ValueError: If ``data`` is not a mapping or a field has the
                wrong shape.
        """
        if not isinstance(data, dict):
            raise ValueError(f"snapshot must be a JSON object, got {type(data).__name__}")

        vocabulary = data.get("vocabulary")
        if vocabulary is not None:
            if not isinstance(vocabulary, list) or not all(isinstance(t, str) for t in vocabulary):
                raise ValueError("vocabulary must be a list of strings")
            vocabulary = list(vocabulary)

        total_docs = data.get("total_docs") or 0
        if not isinstance(total_docs, int) or isinstance(total_docs, bool):
            raise ValueError(f"total_docs must be an integer, got {total_docs!r}")

        return cls(
            class_doc_counts=_validate_counts("class_doc_counts", data.get("class_doc_counts")),
            class_word_counts=_validate_nested_counts(data.get("class_word_counts")),
            class_total_words=_validate_counts("class_total_words", data.get("class_total_words")),
            vocabulary=vocabulary,
            total_docs=total_docs,
        )


def copy_counts(src: Optional[dict[str, int]]) -> Optional[dict[str, int]]:
    if src is None:
        return None
    return dict(src)


def copy_nested_counts(
    src: Optional[dict[str, dict[str, int]]],
) -> Optional[dict[str, dict[str, int]]]:
    if src is None:
        return None
    return {label: copy_counts(inner) for label, inner in src.items()}


def _validate_counts(name: str, value: object) -> Optional[dict[str, int]]:
    """Check a ``{str: int}`` mapping, returning a copy."""
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError(f"{name} must be an object, got {type(value).__name__}")
    for key, count in value.items():
        if not isinstance(count, int) or isinstance(count, bool):
            raise ValueError(f"{name}[{key!r}] must be an integer, got {count!r}")
    return dict(value)


def _validate_nested_counts(value: object) -> Optional[dict[str, dict[str, int]]]:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError(f"class_word_counts must be an object, got {type(value).__name__}")
    return {
        label: _validate_counts(f"class_word_counts[{label!r}]", inner)
        for label, inner in value.items()
    }
