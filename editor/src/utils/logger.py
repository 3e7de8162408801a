"""Global logging and error handling utilities"""
import logging
import sys
import traceback

# Detect debug mode - True if running from source, False if packaged
DEBUG_MODE = not getattr(sys, 'frozen', False)

_logger = logging.getLogger('DroneReportEditor')

_error_handler = None


def set_error_handler(handler):
    """Set a callback for user-facing error reports

    Args:
        handler: Callable(title, message), e.g. a presentation-layer toast.
            Pass None to remove it.
    """
    global _error_handler
    _error_handler = handler


def loggerRaise(e: Exception, user_message: str = None, title: str = "Error"):
    """Log an exception, report it to the user, then re-raise it

    Args:
        e: The exception to handle
        user_message: User-friendly message for the report (optional)
        title: Title for the report

    In DEBUG_MODE:
        - Logs the full traceback before raising

    In RELEASE_MODE:
        - Logs the message only, keeping tracebacks out of user logs

    In both modes the registered error handler (if any) is told, and the
    exception is re-raised so the caller decides how to recover.
    """
    message = user_message if user_message else str(e)
    if DEBUG_MODE:
        tb = ''.join(traceback.format_exception(type(e), e, e.__traceback__))
        _logger.error(f"{title}: {message}\n{tb}")
    else:
        _logger.error(f"{title}: {message} ({type(e).__name__}: {e})")

    if _error_handler is not None:
        _error_handler(title, message)

    raise e
