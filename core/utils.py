import logging
import random
import sys
from typing import Optional, Sequence
from urllib.parse import urlsplit

from core.exceptions import InvalidTargetError

SUPPORTED_SCHEMES = ("http", "https")


def setup_logging(verbose: bool = False):
    """
    Sets up logging for the BusterX application and returns the logger instance.

    Args:
        verbose (bool): If True, set logging level to DEBUG, otherwise INFO.

    Returns:
        logging.Logger: The configured logger instance.
    """
    log_level = logging.DEBUG if verbose else logging.INFO

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to prevent duplicate output
    if logger.handlers:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # One line per request from httpx would drown the findings
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)

    return logger


def normalize_target(target: str) -> str:
    """Prefixes a scheme-less target such as 'example.com' with 'http://'."""
    target = target.strip()
    if "://" not in target:
        return f"http://{target}"
    return target


def extract_scheme(url: str) -> str:
    """
    Returns 'https://' for https targets and 'http://' for everything else.

    Raises:
        InvalidTargetError: If the URL carries no http or https scheme.
    """
    scheme, _, rest = url.partition("://")
    if not rest or scheme.lower() not in SUPPORTED_SCHEMES:
        raise InvalidTargetError(url)
    return "https://" if scheme.lower() == "https" else "http://"


def bare_host(url: str) -> str:
    """
    Strips the scheme, path, query and fragment from a URL, leaving the
    authority (host and optional port).

    Raises:
        InvalidTargetError: If the URL has no scheme or no host.
    """
    extract_scheme(url)
    try:
        netloc = urlsplit(url).netloc
    except ValueError as e:
        raise InvalidTargetError(url, str(e)) from e
    if not netloc:
        raise InvalidTargetError(url, "no host found")
    return netloc


def random_element(pool: Sequence[str], rng: Optional[random.Random] = None) -> str | None:
    """
    Picks one element of the pool uniformly at random.

    Args:
        pool (Sequence[str]): Candidate values, may be empty.
        rng (random.Random, optional): Randomness source; the module-level
                                       generator is used when omitted.

    Returns:
        str | None: The chosen value, or None for an empty pool.
    """
    if not pool:
        return None
    return (rng or random).choice(pool)
