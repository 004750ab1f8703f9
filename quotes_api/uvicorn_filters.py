"""Custom filters for uvicorn access logging."""

import logging

from quotes_api.settings import app_settings


class ExcludeHealthChecksFilter(logging.Filter):
    """
    Logging filter to exclude probe requests from access logs.

    Orchestrators hit /healthz and /readyz every few seconds; those lines
    would drown the useful ones.
    """

    def __init__(self, excluded_paths: list[str] | None = None):
        super().__init__()
        self.excluded_paths = (
            app_settings.LOG_EXCLUDED_PATHS
            if excluded_paths is None
            else excluded_paths
        )

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Determine if the log record should be logged.

        Args:
            record: The log record to evaluate.

        Returns:
            False if the request path is in excluded paths, True otherwise.
        """
        message = record.getMessage()
        return not any(path in message for path in self.excluded_paths)
