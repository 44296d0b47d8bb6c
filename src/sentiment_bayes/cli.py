"""Command-line interface for Sentiment Bayes.

Provides ``demo``, ``classify``, ``evaluate``, and ``serve`` commands with
rich terminal output using the ``click`` and ``rich`` libraries. Every
option can also be set through a ``SENTIMENT_BAYES_*`` environment
variable (for example ``SENTIMENT_BAYES_DATASET``).

Usage::

    sentiment-bayes demo
    sentiment-bayes --dataset reviews.csv classify "Great value for money"
    sentiment-bayes evaluate --split 0.75 --seed 7
    sentiment-bayes --save-snapshot model.json serve --port 8080
"""

from __future__ import annotations

import json
import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, Optional

import click
import uvicorn
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .classifier import NaiveBayesClassifier, evaluate, load_snapshot_file, save_snapshot
from .dataset import DEFAULT_TRAIN_RATIO, DEMO_SENTENCES, default_dataset, load_csv, split_dataset
from .models import Document, Metrics
from .server import create_app

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Options shared by every command."""

    dataset: Path
    load_snapshot: Optional[Path]
    save_snapshot: Optional[Path]
    continue_training: bool


def _fail(message: str) -> NoReturn:
    console.print(f"[bold red]Error:[/] {escape(message)}")
    sys.exit(1)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group(context_settings={"auto_envvar_prefix": "SENTIMENT_BAYES"})
@click.version_option(package_name="sentiment-bayes")
@click.option("--dataset", "-d", type=click.Path(path_type=Path),
              default=Path("data/sample.csv"), show_default=True,
              help="CSV dataset with text,label columns.")
@click.option("--load-snapshot", type=click.Path(path_type=Path), default=None,
              help="JSON snapshot to load before running.")
@click.option("--save-snapshot", type=click.Path(path_type=Path), default=None,
              help="Write the trained model snapshot here (demo|classify|serve).")
@click.option("--continue-training", is_flag=True, default=False,
              help="Train on the dataset even when a snapshot is loaded.")
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Log progress messages.")
@click.pass_context
def main(
    ctx: click.Context,
    dataset: Path,
    load_snapshot: Path | None,
    save_snapshot: Path | None,
    continue_training: bool,
    verbose: bool,
) -> None:
    """📊 Sentiment Bayes — Naive Bayes text classification.

    Train on labeled text, classify new text, evaluate on a held-out
    split, or serve predictions over HTTP.
    """
    _configure_logging(verbose)
    ctx.obj = Settings(
        dataset=dataset,
        load_snapshot=load_snapshot,
        save_snapshot=save_snapshot,
        continue_training=continue_training,
    )


@main.command()
@click.pass_obj
def demo(settings: Settings) -> None:
    """Train and classify a few built-in demo sentences.

    Example: sentiment-bayes demo
    """
    classifier = _trained_classifier(settings)

    console.print("[bold]Sample predictions:[/]")
    for sentence in DEMO_SENTENCES:
        label, probabilities = classifier.predict(sentence)
        console.print(f"{escape(json.dumps(sentence))} -> [bold cyan]{escape(label)}[/]")
        _render_probabilities(probabilities)


@main.command()
@click.argument("text")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
@click.pass_obj
def classify(settings: Settings, text: str, output: str) -> None:
    """Classify a single piece of text.

    Example: sentiment-bayes classify "The service was wonderful"
    """
    if not text:
        raise click.UsageError("TEXT must not be empty.")
    classifier = _trained_classifier(settings)
    label, probabilities = classifier.predict(text)

    if output == "json":
        click.echo(json.dumps({
            "text": text,
            "label": label,
            "probabilities": dict(sorted(probabilities.items())),
        }, indent=2))
        return

    console.print(f"Input: {escape(json.dumps(text))}")
    console.print(f"Predicted sentiment: [bold cyan]{escape(label)}[/]")
    _render_probabilities(probabilities)


@main.command(name="evaluate")
@click.option("--split", "split_ratio", type=float, default=DEFAULT_TRAIN_RATIO,
              show_default=True, help="Fraction of documents used for training.")
@click.option("--seed", type=int, default=None,
              help="Shuffle seed (defaults to the current time).")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
@click.pass_obj
def evaluate_command(settings: Settings, split_ratio: float, seed: int | None, output: str) -> None:
    """Train on a random split and report held-out accuracy.

    Example: sentiment-bayes evaluate --split 0.8 --seed 42
    """
    docs = _load_documents(settings.dataset)
    if seed is None:
        seed = time.time_ns()
    logger.info("Shuffling with seed %d", seed)

    train_docs, test_docs = split_dataset(docs, split_ratio, seed)
    if not test_docs:
        _fail("not enough samples to create a test set; provide a larger dataset")

    classifier = _snapshot_classifier(settings)
    classifier.reset()
    classifier.train_batch(train_docs)
    metrics = evaluate(classifier, test_docs)

    if output == "json":
        click.echo(json.dumps({
            "train_size": len(train_docs),
            "test_size": len(test_docs),
            "seed": seed,
            **metrics.to_dict(),
        }, indent=2))
        return

    console.print(f"Train set size: {len(train_docs)}")
    console.print(f"Test set size: {len(test_docs)}")
    console.print(
        f"Accuracy: [bold]{metrics.accuracy * 100:.2f}%[/] "
        f"({metrics.correct}/{metrics.total})"
    )
    _render_confusion(metrics)


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind.")
@click.option("--port", "-p", type=int, default=8080, show_default=True,
              help="Port for the HTTP server.")
@click.pass_obj
def serve(settings: Settings, host: str, port: int) -> None:
    """Serve predictions over HTTP.

    Example: sentiment-bayes serve --port 8080
    """
    classifier = _trained_classifier(settings)
    app = create_app(classifier)

    logger.info("Serving sentiment API on http://%s:%d/classify", host, port)
    console.print(Panel(
        f"POST [bold]http://{host}:{port}/classify[/] with {{\"text\": ...}}",
        title="📊 Sentiment Bayes",
        border_style="blue",
    ))
    uvicorn.run(app, host=host, port=port, log_level="info")


# ------------------------------------------------------------------
# Model preparation
# ------------------------------------------------------------------

def _load_documents(path: Path) -> list[Document]:
    """Load the dataset, falling back to the built-in corpus on failure."""
    try:
        return load_csv(path)
    except (OSError, ValueError) as e:
        logger.warning("%s, falling back to built-in dataset", e)
        return default_dataset()


def _snapshot_classifier(settings: Settings) -> NaiveBayesClassifier:
    """Return a classifier, restored from a snapshot if one was given."""
    classifier = NaiveBayesClassifier()
    if settings.load_snapshot is not None:
        try:
            load_snapshot_file(classifier, settings.load_snapshot)
        except (OSError, ValueError) as e:
            _fail(f"load snapshot: {e}")
    return classifier


def _trained_classifier(settings: Settings) -> NaiveBayesClassifier:
    """Load the dataset and snapshot, train if needed, and save if asked."""
    docs = _load_documents(settings.dataset)
    classifier = _snapshot_classifier(settings)

    if settings.load_snapshot is None or settings.continue_training:
        classifier.train_batch(docs)
        logger.info("Trained on %d documents", len(docs))

    if settings.save_snapshot is not None:
        try:
            save_snapshot(classifier, settings.save_snapshot)
        except OSError as e:
            _fail(f"write snapshot: {e}")
    return classifier


# ------------------------------------------------------------------
# Rich rendering helpers
# ------------------------------------------------------------------

def _render_probabilities(probabilities: dict[str, float]) -> None:
    """Print class probabilities sorted by label."""
    if not probabilities:
        console.print("  [dim]no class probabilities available[/]")
        return
    for label in sorted(probabilities):
        console.print(f"  {escape(label)}: {probabilities[label]:.2f}")


def _render_confusion(metrics: Metrics) -> None:
    """Render the confusion matrix as a rich table."""
    labels = metrics.labels
    table = Table(title="Confusion matrix (actual → predicted)", show_lines=False)
    table.add_column("Actual", style="cyan")
    for label in labels:
        table.add_column(escape(label) or "(none)", justify="right")

    for actual in sorted(metrics.confusion):
        row = metrics.confusion[actual]
        table.add_row(escape(actual) or "(none)", *(str(row.get(label, 0)) for label in labels))

    console.print(table)
    console.print()


if __name__ == "__main__":
    main()
