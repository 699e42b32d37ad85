import os
import pickle
from collections.abc import Sequence
from typing import Any

from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.naive_bayes import MultinomialNB
from sklearn.pipeline import Pipeline

from ledger_feed.errors import ModelUnavailableError
from ledger_feed.logger import get_logger

from .base import TextClassifier

logger = get_logger(__name__)

ARTIFACT_VERSION = "1"


def build_pipeline() -> Pipeline:
    return Pipeline([
        ('tfidf', TfidfVectorizer(analyzer='char_wb', ngram_range=(2, 4), lowercase=True, min_df=1)),
        ('clf', MultinomialNB(alpha=0.1)),
    ])


class NaiveBayesClassifier(TextClassifier):
    """
    Category model backed by a fitted scikit-learn pipeline.

    Instances are read-only once constructed: ``classify`` only calls
    ``predict`` so one instance can serve concurrent requests.
    """

    def __init__(self, pipeline: Pipeline, version: str = ARTIFACT_VERSION):
        self.pipeline = pipeline
        self.version = version
        self._labels = [str(label) for label in pipeline.classes_]

    @property
    def labels(self) -> list[str]:
        return list(self._labels)

    def classify(self, text: str) -> str:
        return str(self.pipeline.predict([text or ""])[0])

    @classmethod
    def from_examples(cls, texts: Sequence[str], labels: Sequence[str]) -> "NaiveBayesClassifier":
        if not texts or len(texts) != len(labels):
            raise ValueError("Need the same, non-zero number of texts and labels")
        pipeline = build_pipeline()
        pipeline.fit(list(texts), list(labels))
        return cls(pipeline)

    def save(self, path: str) -> None:
        with open(path, "wb") as f:
            pickle.dump({
                "pipeline": self.pipeline,
                "labels": self._labels,
                "version": self.version,
            }, f)

    @classmethod
    def load(cls, path: str) -> "NaiveBayesClassifier":
        if not os.path.exists(path):
            raise ModelUnavailableError(f"Category model not found at '{path}'")

        try:
            with open(path, "rb") as f:
                data: Any = pickle.load(f)
        except (pickle.UnpicklingError, EOFError, AttributeError, ImportError) as exc:
            raise ModelUnavailableError(f"Category model at '{path}' is unreadable: {exc}") from exc

        pipeline = data.get("pipeline") if isinstance(data, dict) else None
        if pipeline is None or not hasattr(pipeline, "classes_"):
            raise ModelUnavailableError(f"Category model at '{path}' holds no fitted pipeline")

        logger.info(
            "[MODEL] Loaded category model v%s from %s (%d labels).",
            data.get("version", "?"),
            path,
            len(pipeline.classes_),
        )
        return cls(pipeline, version=str(data.get("version", ARTIFACT_VERSION)))
