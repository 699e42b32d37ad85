from abc import ABC, abstractmethod


class TextClassifier(ABC):
    @abstractmethod
    def classify(self, text: str) -> str:
        """Return the single best category label for the text."""
        pass

    @property
    @abstractmethod
    def labels(self) -> list[str]:
        """All labels the classifier can return."""
        pass
