"""
Logging configuration
"""
import logging
import sys


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(service_name: str, log_level: str = "INFO") -> logging.Logger:
    """
    Configure root logging for the service.
    
    Args:
        service_name: Name used for the service logger
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    
    Returns:
        Service logger
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    
    if not any(getattr(h, "_coffee_pos", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._coffee_pos = True
        root.addHandler(handler)
    
    return logging.getLogger(service_name)
