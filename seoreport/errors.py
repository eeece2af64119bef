"""Exception hierarchy for the analysis pipeline.

Errors that can reach an HTTP client carry the ``status_code`` they map to
and a human-readable ``message``.
"""


class SEOReportError(Exception):
    status_code = 500
    message = "Failed to analyze website. Please check the URL and try again."

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InputValidationError(SEOReportError, ValueError):
    """The requested URL is malformed or not allowed. Rejected before fetching."""

    status_code = 400
    message = "Invalid URL provided"


class FetchError(SEOReportError):
    """The target page could not be retrieved."""


class FetchTimeoutError(FetchError):
    status_code = 408
    message = "Request timeout - website took too long to respond"


class FetchTargetNotFound(FetchError):
    status_code = 404
    message = "Website not found (404)"


class FetchTargetServerError(FetchError):
    status_code = 502
    message = "Website server error - please try again later"


class ParseError(SEOReportError):
    """The fetched document could not be parsed at all."""


class ExtractionElementError(SEOReportError):
    """A single element could not be extracted. Never escapes the extractor."""
