# Main script: mirror each URL given on the command line
import argparse
import logging
import sys

from config_loader import load_config
from logger_setup import setup_logging
from errors import MirrorError
from fetchers import retrieve_resource
from file_handler import ensure_parent_dir, page_target_path, url_host

SEPARATOR = "-" * 52


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Mirror web pages and their images, stylesheets and scripts to disk.")
    parser.add_argument('urls', nargs='+', metavar='URL', help="Page(s) to mirror")
    parser.add_argument('--metadata', action='store_true', help="Display metadata regarding image count, etc.")
    parser.add_argument('--config', help="Path to a JSON config file")
    parser.add_argument('--output-dir', help="Output root directory (overrides config)")
    parser.add_argument('--workers', type=int, help="Concurrent asset downloads per page (overrides config)")
    parser.add_argument('--relative-links', action='store_true', default=None,
                        help="Rewrite asset references relative to the saved page")
    parser.add_argument('--verbose', '-v', action='store_true', help="Enable debug logging")
    return parser.parse_args(argv)


def format_metadata(url, page_data):
    """Console report for one mirrored page."""
    counts = page_data.counts()
    lines = [
        f"site: {url_host(url)}",
        f"images: {counts['images']}",
        f"javascript: {counts['javascript']}",
        f"stylesheet: {counts['stylesheet']}",
        f"num_links: {counts['num_links']}",
        f"last_fetch: {page_data.fetched_at}",
    ]
    return "\n".join(lines)


def mirror_url(url, config):
    """
    Mirrors one top-level URL.

    Returns:
        tuple: (target_path, PageData)
    Raises:
        ValueError: the URL has no host.
        MirrorError: the page could not be mirrored.
    """
    target_path = page_target_path(url, config['output_dir'], config['page_suffix'])
    ensure_parent_dir(target_path)
    return target_path, retrieve_resource(url, target_path, config)


# --- Main Execution ---
def main(argv=None):
    """Mirrors every URL; a failing URL does not stop the others. Returns the exit status."""
    args = parse_args(argv)
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.output_dir:
        config['output_dir'] = args.output_dir
    if args.workers is not None:
        if args.workers < 1:
            print("Error: --workers must be a positive integer.", file=sys.stderr)
            return 2
        config['max_workers'] = args.workers
    if args.relative_links:
        config['relative_asset_links'] = True

    setup_logging(config['log_file'], level=logging.DEBUG if args.verbose else logging.INFO)
    logging.info(f"Retrieving the following URLs: {args.urls}")

    fail_count = 0
    for url in args.urls:
        try:
            target_path, page_data = mirror_url(url, config)
        except ValueError as e:
            logging.error(f"Invalid URL: {url}. Skipping... ({e})")
            fail_count += 1
            continue
        except MirrorError as e:
            logging.error(f"Failed to mirror {url}: {e}")
            fail_count += 1
            continue

        print(SEPARATOR)
        print(f"{url} to {target_path}")
        if page_data.warnings:
            logging.warning(f"{len(page_data.warnings)} asset(s) of {url} could not be mirrored")
        if args.metadata:
            print(format_metadata(url, page_data))

    logging.info(f"Mirrored {len(args.urls) - fail_count}/{len(args.urls)} URLs.")
    return 1 if fail_count else 0


if __name__ == "__main__":
    sys.exit(main())
