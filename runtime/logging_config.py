import logging
import os
from typing import Optional

LOGGER_NAME = "compute_kernels"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _env_level() -> Optional[int]:
    """Return the level named by `COMPUTE_KERNELS_LOG_LEVEL`, if valid."""
    name = os.environ.get("COMPUTE_KERNELS_LOG_LEVEL", "").strip().upper()
    if not name:
        return None
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else None


def setup_logging(
    log_file: Optional[str] = None,
    *,
    quiet: bool = False,
    debug: bool = False,
) -> logging.Logger:
    """Configure and return the shared `compute_kernels` logger.

    No file is written unless `log_file` is given. `debug` wins over
    `COMPUTE_KERNELS_LOG_LEVEL`; the console handler never goes below INFO so
    kernel dispatch traces only land in the log file.
    """
    logger = logging.getLogger(LOGGER_NAME)
    # Keep propagation enabled so pytest caplog still captures records when
    # console output is suppressed.
    logger.propagate = True

    if debug:
        level = logging.DEBUG
    else:
        level = _env_level() or logging.INFO
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="w")
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as exc:
            print(f"[logging] Could not open log file '{log_file}': {exc}")

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(max(level, logging.INFO))
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
