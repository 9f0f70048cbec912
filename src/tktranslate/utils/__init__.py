from .structured_log import JsonFormatter, get_logger, setup_logging  # noqa: F401

__all__ = ["JsonFormatter", "get_logger", "setup_logging"]
