"""Labeled dataset loading and train/test splitting.

Datasets are CSV files with ``text,label`` columns. The first row may be a
header. A small built-in review corpus is available for running without
any files.
"""

from __future__ import annotations

import csv
import math
import random
from collections.abc import Sequence
from pathlib import Path

from .models import Document

DEFAULT_TRAIN_RATIO = 0.8


def load_csv(path: str | Path) -> list[Document]:
    """Read ``text,label`` rows from a CSV file.

    Rows with fewer than two columns are ignored, as are rows whose text or
    label is blank. Labels are lower-cased. The first two-column row is
    skipped when it looks like a header (``text`` / ``label``).

    Args:
        path: Path to the CSV file.

    Returns:
        Documents in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the CSV is malformed or contains no usable rows.
    """
    path = Path(path)
    docs: list[Document] = []
    first_row = True

    with open(path, "r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f, skipinitialspace=True, strict=True)
        try:
            for record in reader:
                if len(record) < 2:
                    continue
                if first_row:
                    first_row = False
                    if _looks_like_header(record):
                        continue

                text = record[0].strip()
                label = record[1].strip()
                if not text or not label:
                    continue
                docs.append(Document(text=text, label=label.lower()))
        except csv.Error as e:
            raise ValueError(f"read dataset line {reader.line_num}: {e}") from e

    if not docs:
        raise ValueError("dataset is empty")
    return docs


def _looks_like_header(record: Sequence[str]) -> bool:
    left = record[0].strip().lower()
    right = record[1].strip().lower()
    return "text" in left and "label" in right


def split_dataset(
    documents: Sequence[Document],
    train_ratio: float = DEFAULT_TRAIN_RATIO,
    seed: int | None = None,
) -> tuple[list[Document], list[Document]]:
    """Shuffle documents and split them into train and test lists.

    Both sides get at least one document when there are two or more. A
    ratio outside ``(0, 1)`` falls back to 0.8.

    Args:
        documents: Labeled documents. Not modified.
        train_ratio: Fraction of documents used for training.
        seed: Shuffle seed for reproducible splits.

    Returns:
        ``(train, test)`` lists.
    """
    if not documents:
        return [], []
    if len(documents) == 1:
        return list(documents), []
    if not 0 < train_ratio < 1:
        train_ratio = DEFAULT_TRAIN_RATIO

    shuffled = list(documents)
    random.Random(seed).shuffle(shuffled)

    # Round half away from zero.
    train_size = math.floor(train_ratio * len(shuffled) + 0.5)
    train_size = min(max(train_size, 1), len(shuffled) - 1)
    return shuffled[:train_size], shuffled[train_size:]


# ---------------------------------------------------------------------------
# Built-in corpus
# ---------------------------------------------------------------------------

DEMO_SENTENCES: tuple[str, ...] = (
    "The storyline was engaging and fun",
    "Support ignored my emails for weeks",
    "Delicious food but the service was slow",
    "What an unforgettable and heartwarming play",
)

_DEFAULT_TRAINING_DATA: tuple[Document, ...] = (
    Document("I love this phone, it's fantastic", "positive"),
    Document("The camera is excellent and pictures are great", "positive"),
    Document("Absolutely wonderful experience and amazing service", "positive"),
    Document("Such a pleasant surprise, highly recommend it", "positive"),
    Document("The user interface is clean and easy to use", "positive"),
    Document("What a delightful movie, I enjoyed every minute", "positive"),
    Document("This book is inspiring and uplifting", "positive"),
    Document("Great taste and perfect texture", "positive"),
    Document("The trip was fantastic, we had a blast", "positive"),
    Document("Beautiful design and very comfortable", "positive"),
    Document("I hate how slow this is", "negative"),
    Document("The screen cracked within a day", "negative"),
    Document("Terrible service and rude employees", "negative"),
    Document("I'm disappointed and won't buy again", "negative"),
    Document("The instructions are confusing and useless", "negative"),
    Document("Worst purchase I've made this year", "negative"),
    Document("The food was cold and tasteless", "negative"),
    Document("Boring plot with predictable twists", "negative"),
    Document("Not worth the price at all", "negative"),
    Document("Customer support never replied", "negative"),
)


def default_dataset() -> list[Document]:
    """Return a fresh copy of the built-in review corpus."""
    return list(_DEFAULT_TRAINING_DATA)
