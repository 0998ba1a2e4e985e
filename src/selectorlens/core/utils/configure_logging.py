import logging
import sys


def _to_level(level, fallback: int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), fallback)
    return level if isinstance(level, int) else fallback


def configure_logger(general_level='INFO', module_specific_levels=None, silenced_loggers=None):
    """
    Configures the root logger and specific module loggers with a single
    stderr handler, so log lines never mix with report output on stdout.
    """
    # 1. Create the handler and a standard formatter.
    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s"
    )
    handler.setFormatter(formatter)

    # 2. Configure the root logger.
    root_logger = logging.getLogger()
    root_logger.setLevel(_to_level(general_level, logging.INFO))

    # 3. Clear any existing handlers and add the new one.
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    # 4. Configure levels for specific modules.
    if module_specific_levels:
        for name, level in module_specific_levels.items():
            logging.getLogger(name).setLevel(_to_level(level, logging.INFO))

    # 5. Muzzle noisy loggers by setting their level high.
    if silenced_loggers:
        for name, level in silenced_loggers.items():
            logging.getLogger(name).setLevel(_to_level(level, logging.CRITICAL))
