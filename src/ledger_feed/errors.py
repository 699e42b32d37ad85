class EnrichmentError(Exception):
    """Base class for failures that abort a feed enrichment request."""

    status_code = 500
    kind = "enrichment_error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.kind)
        self.message = message or self.kind


class DataFormatError(EnrichmentError):
    """Provider data could not be read, e.g. a non-numeric amount."""

    status_code = 422
    kind = "data_format_error"


class ModelUnavailableError(EnrichmentError):
    """The category classifier could not be loaded or failed to answer."""

    status_code = 503
    kind = "model_unavailable"
