# Decorators for HTTP request functions
import time
import logging
import requests
import functools

from errors import TransportError

logger = logging.getLogger(__name__)


def _find_url(args, kwargs):
    """The requested URL (the 'url' kwarg or first positional string), for log and error messages."""
    url = kwargs.get('url')
    if url:
        return url
    if args and isinstance(args[0], str):
        return args[0]
    return None


def translate_transport_errors(max_retries_key="max_retries", delay_key="request_delay_seconds"):
    """
    Decorator turning `requests` exceptions into TransportError, with optional retries.

    Assumes the wrapped function:
    - Makes a single `requests` call and returns its response.
    - Accepts a 'config' dictionary keyword argument (`config=...`) containing
      the keys named by `max_retries_key` and `delay_key`.

    Timeouts and connection errors are retried up to config[max_retries_key]
    times with exponential backoff starting at config[delay_key] seconds.
    With the default of 0 retries every failure is terminal. Any other
    RequestException is never retried.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            config = kwargs.get('config') or {}
            max_retries = config.get(max_retries_key, 0)
            delay = config.get(delay_key, 1)

            url = _find_url(args, kwargs)
            log_url_snippet = f"for {url[:80]}" if url else f"in {func.__name__}"

            retries = 0
            while True:
                if retries > 0:
                    wait_time = (2 ** (retries - 1)) * delay
                    logger.warning(f"Retrying request {log_url_snippet} ({retries}/{max_retries}) after delay of {wait_time:.2f} seconds...")
                    time.sleep(wait_time)

                try:
                    return func(*args, **kwargs)

                except (requests.exceptions.Timeout, requests.exceptions.ConnectionError) as e:
                    exc_type = type(e).__name__
                    if retries < max_retries:
                        logger.warning(f"{exc_type} occurred {log_url_snippet}. Retrying ({retries + 1}/{max_retries})...")
                        retries += 1
                        continue
                    raise TransportError(f"Error getting URL: {url}. ({e})", url=url) from e

                except requests.exceptions.RequestException as e:
                    raise TransportError(f"Error getting URL: {url}. ({e})", url=url) from e

        return wrapper
    return decorator
