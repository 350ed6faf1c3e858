import logging

LOGGER_NAME = "decoder"


def setup_logger(level: str = "INFO") -> logging.Logger:
    """Attach one console handler to the package logger. Safe to call twice."""
    logger = logging.getLogger(LOGGER_NAME)

    formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(name)s - %(module)s - %(message)s"
    )
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    logger.handlers = []
    logger.addHandler(console_handler)
    logger.setLevel(level)

    logger.propagate = False
    logger.debug("Decoder logger initialized")

    return logger
