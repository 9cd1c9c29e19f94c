"""Package-wide logger factory."""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str, verbose: bool = False) -> logging.Logger:
    """
    Return a named logger configured for compositelab diagnostics.

    Parameters
    ----------
    name : str
        Logger name, usually ``f"{__name__}.{self.__class__.__name__}"``.
    verbose : bool, optional
        If True, the logger emits DEBUG records; otherwise INFO and above.

    Returns
    -------
    logging.Logger
        Logger with a single stream handler attached.

    Notes
    -----
    - Handlers are attached once per logger name, so repeated calls do not duplicate output.
    - Propagation stays enabled so pytest's ``caplog`` and application handlers still see records.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if not any(getattr(h, "_compositelab", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._compositelab = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
