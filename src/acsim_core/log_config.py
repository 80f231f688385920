# --- src/acsim_core/log_config.py ---
import logging
import os
import sys

LOG_LEVEL_ENV_VAR = "ACSIM_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"


def _resolve_level(level):
    """An explicit level wins; otherwise ACSIM_LOG_LEVEL (a name such as 'DEBUG'), else INFO."""
    if level is not None:
        return level
    name = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip().upper()
    resolved = logging.getLevelName(name) if name else logging.INFO
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level=None):
    """ Configures console logging to stdout for the whole process. """
    level = _resolve_level(level)
    root_logger = logging.getLogger()

    # Replace whatever handlers a previous call (or the host application) installed.
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)
    logging.debug("Logging configured at level %s.", logging.getLevelName(level))
