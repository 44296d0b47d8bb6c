"""Shared test fixtures for sentiment-bayes tests."""

from __future__ import annotations

import csv
from pathlib import Path

import pytest

from sentiment_bayes.classifier import NaiveBayesClassifier
from sentiment_bayes.dataset import default_dataset
from sentiment_bayes.models import Document


@pytest.fixture
def known_documents() -> list[Document]:
    """The two-document corpus used for hand-checked probabilities."""
    return [
        Document("great and wonderful", "positive"),
        Document("terrible and awful", "negative"),
    ]


@pytest.fixture
def known_classifier(known_documents: list[Document]) -> NaiveBayesClassifier:
    """Classifier trained on the two-document corpus."""
    nb = NaiveBayesClassifier()
    nb.train_batch(known_documents)
    return nb


@pytest.fixture
def review_classifier() -> NaiveBayesClassifier:
    """Classifier trained on the built-in review corpus."""
    nb = NaiveBayesClassifier()
    nb.train_batch(default_dataset())
    return nb


@pytest.fixture
def dataset_csv(tmp_path: Path) -> Path:
    """A small CSV dataset with a header row."""
    file = tmp_path / "reviews.csv"
    file.write_text(
        "text,label\n"
        '"Great product, works perfectly",Positive\n'
        "Fantastic value and great quality,positive\n"
        "I love it and use it daily,positive\n"
        "Broke after one day,negative\n"
        "Terrible quality and awful support,NEGATIVE\n"
        "Waste of money and time,negative\n",
        encoding="utf-8",
    )
    return file


@pytest.fixture
def reviews_csv(tmp_path: Path) -> Path:
    """The built-in review corpus written out as a CSV dataset."""
    file = tmp_path / "builtin.csv"
    with open(file, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["text", "label"])
        for doc in default_dataset():
            writer.writerow([doc.text, doc.label])
    return file
