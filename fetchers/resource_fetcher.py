# Module for retrieving a single resource and writing it to disk

import logging
import requests
from bs4 import BeautifulSoup

import constants # Import constants
import html_processor
from config_loader import default_config
from errors import ParseError, SerializationError, StatusError, TransportError
from file_handler import ensure_resource_dir, write_bytes, write_stream
from page_data import PageData
from path_utils import get_extension
from .decorators import translate_transport_errors # Import the decorator

logger = logging.getLogger(__name__)


def is_html_target(target_path):
    """
    Whether the resource saved at target_path is treated as an HTML page.

    Decided by the target path's extension alone (case-sensitive), never by the
    response's Content-Type. A misnamed binary is parsed as HTML and an HTML
    page saved under another extension is stored untouched.
    """
    extension, found = get_extension(target_path)
    return found and extension == constants.HTML_EXTENSION


@translate_transport_errors()
def _send_request(url, config):
    """Issues the GET request. The caller closes the response."""
    headers = {'User-Agent': config.get('user_agent', constants.DEFAULT_USER_AGENT)}
    request_timeout = config.get('request_timeout', constants.DEFAULT_REQUEST_TIMEOUT)

    logger.debug(f"Requesting: {url}")
    return requests.get(url, headers=headers, timeout=request_timeout, stream=True)


def _iter_body(response, url, chunk_size):
    try:
        yield from response.iter_content(chunk_size=chunk_size)
    except requests.exceptions.RequestException as e:
        raise TransportError(f"Error reading body of URL: {url}. ({e})", url=url) from e


def _read_body(response, url):
    try:
        return response.content
    except requests.exceptions.RequestException as e:
        raise TransportError(f"Error reading body of URL: {url}. ({e})", url=url) from e


def _save_html(response, url, target_path, config, page_data):
    status_code = response.status_code
    if not 200 <= status_code < 300:
        raise StatusError(f"Status code error: {status_code} {response.reason} for {url}", url=url, status_code=status_code)

    # Nested assets are written under this folder
    ensure_resource_dir(target_path)

    body = _read_body(response, url)
    try:
        soup = BeautifulSoup(body, 'html.parser')
    except Exception as e:
        raise ParseError(f"Unable to parse HTML from {url}: {e}", url=url) from e

    html_processor.rewrite_assets(soup, url, target_path, config, retrieve_resource, page_data=page_data)

    try:
        html_bytes = soup.encode('utf-8')
    except Exception as e:
        raise SerializationError(f"Unable to rebuild page {url} with error: {e}", url=url) from e

    write_bytes(html_bytes, target_path, url=url)


def retrieve_resource(url, target_path, config=None):
    """
    Fetches url and writes it to target_path.

    HTML targets (see is_html_target) are parsed, their assets mirrored into
    '<target_path>-res/' by html_processor.rewrite_assets, and the rewritten
    markup is saved. Anything else is streamed to disk byte for byte.

    Returns:
        PageData: populated for HTML targets, empty otherwise.
    Raises:
        MirrorError: a subclass describing what failed. Nothing is written for
        a page whose status is not 2xx.
    """
    if config is None:
        config = default_config()

    page_data = PageData()
    response = _send_request(url, config=config)
    try:
        if is_html_target(target_path):
            _save_html(response, url, target_path, config, page_data)
        else:
            if not 200 <= response.status_code < 300:
                # Binary resources are kept whatever the status, only HTML pages are rejected
                logger.warning(f"Saving {url} despite status {response.status_code}")
            chunk_size = config.get('chunk_size', constants.DEFAULT_CHUNK_SIZE)
            write_stream(_iter_body(response, url, chunk_size), target_path, url=url)
    finally:
        response.close()

    logger.info(f"Saved {url} to {target_path}")
    return page_data
