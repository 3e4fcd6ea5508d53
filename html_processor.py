# Module for HTML asset discovery and link rewriting

import logging
import os
import threading
from collections import namedtuple
from concurrent.futures import ThreadPoolExecutor
from urllib.parse import urljoin

# Set up a specific logger for this module
logger = logging.getLogger(__name__)

import constants # Import constants
from errors import MirrorError, ResolutionError
from file_handler import asset_target_path
from page_data import PageData

# One embedded asset scheduled for download
AssetJob = namedtuple('AssetJob', ['kind', 'tag', 'attr', 'reference', 'url', 'local_path'])

# Marks threads that are already running an asset download from a pool
_worker_state = threading.local()


# --- Discovery ---
def find_links(soup):
    """Raw href values of all anchors, in document order. Nothing is resolved."""
    return [a_tag['href'] for a_tag in soup.find_all('a', href=True)]


def resolve_reference(base_url, reference):
    """Resolves a reference found in a page against the page's URL."""
    try:
        return urljoin(base_url, reference.strip())
    except ValueError as e:
        raise ResolutionError(f"Unable to resolve '{reference}' against {base_url}: {e}", url=base_url) from e


def _asset_tags(soup, tag_name):
    if tag_name == 'link':
        # rel is multi-valued, this matches any link whose rel list contains 'stylesheet'
        return soup.find_all('link', rel='stylesheet')
    return soup.find_all(tag_name)


def find_asset_jobs(soup, base_url, page_path, page_data):
    """
    Builds the download jobs for images, stylesheets and scripts, in that order.

    Each job gets a freshly generated local path. References that cannot be
    resolved are recorded in page_data.warnings and skipped.
    """
    jobs = []
    for tag_name, attr, kind in constants.ASSET_KINDS:
        for tag in _asset_tags(soup, tag_name):
            raw_reference = tag.get(attr)
            if not raw_reference or not raw_reference.strip():
                continue
            # Browsers ignore surrounding whitespace in URL attributes
            reference = raw_reference.strip()

            local_path = asset_target_path(page_path, reference)
            try:
                abs_url = resolve_reference(base_url, reference)
            except ResolutionError as e:
                logger.warning(f"Skipping {kind} asset: {e}")
                page_data.warnings.append(str(e))
                continue

            jobs.append(AssetJob(kind, tag, attr, reference, abs_url, local_path))
    return jobs


# --- Download ---
def _fetch_asset(job, config, fetch):
    """Runs one job. Returns the MirrorError on failure, None on success."""
    try:
        fetch(job.url, job.local_path, config)
    except MirrorError as e:
        return e
    return None


def _fetch_asset_in_worker(job, config, fetch):
    _worker_state.active = True
    try:
        return _fetch_asset(job, config, fetch)
    finally:
        _worker_state.active = False


def _run_jobs(jobs, config, fetch):
    """
    Runs the jobs and returns their results in job order.

    Only the outermost page gets a thread pool. A nested HTML asset fetched
    inside a worker mirrors its own assets sequentially on that worker, so at
    most max_workers requests are in flight for the whole run.
    """
    max_workers = config.get('max_workers', constants.DEFAULT_MAX_WORKERS)
    if max_workers <= 1 or len(jobs) <= 1 or getattr(_worker_state, 'active', False):
        return [_fetch_asset(job, config, fetch) for job in jobs]

    logger.debug(f"Fetching {len(jobs)} assets with {max_workers} workers")
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        # map() keeps results aligned with jobs
        return list(pool.map(lambda job: _fetch_asset_in_worker(job, config, fetch), jobs))


# --- Rewriting ---
def _link_value(local_path, page_path, config):
    if not config.get('relative_asset_links', False):
        return local_path
    page_dir = os.path.dirname(page_path) or '.'
    # POSIX separators for use inside HTML
    return os.path.relpath(local_path, start=page_dir).replace(os.sep, '/')


def rewrite_assets(soup, base_url, page_path, config, fetch, page_data=None):
    """
    Mirrors every image, stylesheet and script of a parsed page.

    Each asset is fetched with `fetch(url, local_path, config)` (normally
    fetchers.retrieve_resource, so the call recurses). On success the tag's
    attribute is replaced by the local path and the path is recorded in the
    matching PageData list. A failed asset only produces a warning; its tag
    keeps the original reference. Anchor hrefs are collected as-is.

    The soup is modified in place and only on the calling thread, even when
    config['max_workers'] allows concurrent downloads.

    Returns:
        PageData: the populated metadata (page_data itself when given).
    """
    if page_data is None:
        page_data = PageData()

    page_data.links.extend(find_links(soup))

    jobs = find_asset_jobs(soup, base_url, page_path, page_data)
    results = _run_jobs(jobs, config, fetch)

    saved_count = 0
    for job, error in zip(jobs, results):
        if error is not None:
            message = f"Failed to mirror {job.kind} asset '{job.reference}' ({job.url}): {error}"
            logger.warning(message)
            page_data.warnings.append(message)
            continue

        getattr(page_data, job.kind).append(job.local_path)
        job.tag[job.attr] = _link_value(job.local_path, page_path, config)
        saved_count += 1
        logger.debug(f"Rewrote {job.reference} -> {job.tag[job.attr]}")

    logger.info(f"Asset processing summary for {base_url}: Found={len(jobs)}, Saved={saved_count}, Failed={len(jobs) - saved_count}, Links={len(page_data.links)}")
    return page_data
