"""
Base service class.
Services hold business rules and orchestrate repositories; views stay thin.
"""
import logging


def format_context(context: dict) -> str:
    """Render log context as sorted key=value pairs, skipping empty values"""
    return ' '.join(f"{key}={value}" for key, value in sorted(context.items()) if value is not None)


class BaseService:
    """
    Base service providing a per-class logger.

    Log lines read "<message> | key=value ...", so a grep on an id finds every
    step an operation took. Records carry the calling service method as
    their funcName and line, not these helpers.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    def _format(self, message: str, context: dict) -> str:
        rendered = format_context(context)
        return f"{message} | {rendered}" if rendered else message

    def log_info(self, message: str, **context):
        self.logger.info(self._format(message, context), stacklevel=2)

    def log_warning(self, message: str, **context):
        self.logger.warning(self._format(message, context), stacklevel=2)

    def log_error(self, message: str, error: Exception = None, **context):
        """Log an error; with `error` the traceback is attached"""
        if error is not None:
            context.setdefault('error', str(error))
            self.logger.error(self._format(message, context), exc_info=error, stacklevel=2)
        else:
            self.logger.error(self._format(message, context), stacklevel=2)
