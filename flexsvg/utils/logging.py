import logging

_logger = logging.getLogger("flexsvg")
_logger.addHandler(logging.NullHandler())


def get_logger():
    """Returns the package logger so applications can attach handlers."""
    return _logger


def log_message(message, verbose=False, always_print=False):
    """
    Emit a formatted log message

    Args:
        message (str): The message to emit
        verbose (bool): Whether detailed logs are enabled
        always_print (bool): Whether to emit regardless of verbose setting
    """
    if not verbose and not always_print:
        return

    if always_print:
        _logger.warning(f"{message}")
    else:
        _logger.info(f"{message}")
