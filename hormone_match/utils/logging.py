"""
Shared logging configuration.

Service modules create their own ``Logger()``, which reads the service name
and level from the environment. Corpus loading logs through ``logger``
directly so that file errors carry the corpus settings.
"""
import os
import sys
import json
import traceback
from aws_lambda_powertools import Logger

def format_exception(exc_info):
    """
    Flatten an exception and its traceback into one log-friendly line.

    Args:
        exc_info: ``True``, an ``(type, value, traceback)`` tuple or None

    Returns:
        The traceback joined with ' | ', or None when there is nothing to format
    """
    if exc_info is True:
        exc_info = sys.exc_info()
    if not (isinstance(exc_info, tuple) and len(exc_info) == 3) or exc_info[0] is None:
        return None

    lines = traceback.format_exception(*exc_info)
    return ' | '.join(line.rstrip('\n').replace('\n', ' | ') for line in lines).strip()

class SingleLineLogger(Logger):
    """Logger that keeps tracebacks on the same line as the log record."""

    def exception(self, message, *args, **kwargs):
        extra = kwargs.pop('extra', None) or {}
        extra['exception'] = format_exception(kwargs.pop('exc_info', True))
        super().exception(message, *args, exc_info=False, extra=extra, **kwargs)

logger = SingleLineLogger(
    service=os.environ.get('POWERTOOLS_SERVICE_NAME', 'hormone_match'),
    level=os.environ.get('LOG_LEVEL', 'INFO'),
    json_serializer=json.dumps,
    use_rfc3339=True
)

logger.append_keys(
    corpus_path=os.environ.get('RESEARCH_CORPUS_PATH'),
    reference_year=os.environ.get('RESEARCH_REFERENCE_YEAR')
)

def log_exception(logger, message, exc_info=None, **kwargs):
    """Log the exception currently being handled at error level, on one line."""
    extra = kwargs.pop('extra', None) or {}
    extra['exception'] = format_exception(exc_info or sys.exc_info())
    logger.error(message, extra=extra, **kwargs)
