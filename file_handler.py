# Module for file system operations (output naming, directories, writing)

import os
import logging
import uuid
from urllib.parse import urlparse
import constants # Import constants
from errors import FilesystemError
from path_utils import reference_extension


# --- Output Naming ---
def url_host(url):
    """
    Host of url with its port, without any user:password@ part.

    Raises ValueError when the URL has no host or an invalid port.
    """
    parsed_url = urlparse(url)
    host = parsed_url.hostname
    if not host:
        raise ValueError(f"URL has no host component: {url}")
    port = parsed_url.port
    if port is not None:
        host = f"{host}:{port}"
    return host


def page_target_path(url, output_dir=constants.DEFAULT_OUTPUT_DIR, suffix=constants.DEFAULT_PAGE_SUFFIX):
    """
    Deterministic target path of a top-level page: <output_dir>/<host><path>.<suffix>

    A root or trailing-slash path is saved as 'index'. '.' and '..' segments are
    dropped so the result always stays under output_dir.
    """
    host = url_host(url)

    path = urlparse(url).path
    segments = [part for part in path.split('/') if part and part not in ('.', '..')]
    if path.endswith('/'):
        segments.append(constants.INDEX_FILENAME_BASE)

    relative = '/'.join([host] + segments)
    return f"{output_dir.rstrip('/')}/{relative}.{suffix}"


def resource_dir(target_path):
    """Folder holding the mirrored assets of the page saved at target_path."""
    return f"{target_path}{constants.RESOURCE_DIR_SUFFIX}"


def asset_target_path(page_path, reference):
    """
    Collision-free path for one asset of the page saved at page_path.

    A fresh uuid4 is used for every call, so the same reference twice on one
    page gets two different files. The extension is copied from the reference
    when it has one.
    """
    filename = str(uuid.uuid4())
    extension, found = reference_extension(reference)
    if found:
        filename = f"{filename}.{extension}"
    return f"{resource_dir(page_path)}/{filename}"


# --- Directories ---
def ensure_parent_dir(path):
    """Creates the directory containing path. Returns the directory."""
    parent = os.path.dirname(path)
    if not parent:
        return parent
    try:
        os.makedirs(parent, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"Unable to create directory: {parent} ({e})", path=parent) from e
    return parent


def ensure_resource_dir(target_path):
    """Creates the asset folder of an HTML page. Returns its path."""
    res_dir = resource_dir(target_path)
    try:
        os.makedirs(res_dir, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"Unable to create resource directory: {res_dir} ({e})", path=res_dir) from e
    logging.debug(f"Resource directory ready: {res_dir}")
    return res_dir


# --- File Saving ---
def _remove_partial(path):
    try:
        os.remove(path)
        logging.debug(f"Removed partially written file: {path}")
    except OSError as e:
        logging.warning(f"Could not remove partially written file {path}: {e}")


def write_stream(chunks, path, url=None):
    """
    Writes an iterable of byte chunks to path.

    The file is removed again if copying fails part way, so a failed download
    never leaves a truncated file behind.
    Returns the number of bytes written.
    """
    try:
        f = open(path, 'wb')
    except OSError as e:
        raise FilesystemError(f"Unable to create file: {path} ({e})", url=url, path=path) from e

    written = 0
    try:
        with f:
            for chunk in chunks:
                if chunk:
                    f.write(chunk)
                    written += len(chunk)
    except OSError as e:
        _remove_partial(path)
        raise FilesystemError(f"Unable to save URL: {url} to {path}. ({e})", url=url, path=path) from e
    except Exception:
        _remove_partial(path)
        raise

    logging.debug(f"Wrote {written} bytes to {path}")
    return written


def write_bytes(content, path, url=None):
    """Writes a complete bytes object to path."""
    return write_stream([content], path, url=url)
