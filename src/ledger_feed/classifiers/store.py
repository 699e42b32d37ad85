import threading
from collections.abc import Callable

from ledger_feed.core import settings
from ledger_feed.errors import ModelUnavailableError
from ledger_feed.logger import get_logger

from .base import TextClassifier
from .bayes import NaiveBayesClassifier

logger = get_logger(__name__)

Loader = Callable[[str], TextClassifier]


class ModelStore:
    """Loads the category model on first use and keeps it for the process lifetime."""

    def __init__(self, path: str, loader: Loader = NaiveBayesClassifier.load):
        self.path = path
        self._loader = loader
        self._model: TextClassifier | None = None
        self._lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._model is not None

    def get(self) -> TextClassifier:
        # Fast path: already loaded
        model = self._model
        if model is not None:
            return model

        with self._lock:
            # Another thread may have finished loading while we waited
            model = self._model
            if model is None:
                logger.info("[MODEL] Loading category model from %s", self.path)
                try:
                    model = self._loader(self.path)
                except ModelUnavailableError:
                    raise
                except Exception as exc:
                    raise ModelUnavailableError(f"Failed to load category model: {exc}") from exc
                self._model = model
            return model


_store: ModelStore | None = None
_store_lock = threading.Lock()


def get_model_store() -> ModelStore:
    global _store
    if _store is not None:
        return _store
    with _store_lock:
        if _store is None:
            _store = ModelStore(settings.get_model_path())
        return _store
