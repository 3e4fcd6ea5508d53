# Module for deriving file extensions from names and URLs
from urllib.parse import urlparse


def get_extension(name):
    """
    Returns the final period-delimited component of a raw string and whether one exists.

    "xxx.yyy.html" -> ("html", True), "README" -> ("", False).
    No URL parsing is applied, so a '.' inside a query string or host name
    ends up in the result. Use reference_extension() for asset URLs.
    """
    parts = name.split('.')
    if len(parts) > 1:
        return parts[-1], True
    return "", False


def reference_extension(reference):
    """
    Extension for naming a downloaded asset, taken from the last path segment only.

    Query strings and fragments are ignored. Returns ("", False) when the
    segment has no usable extension.
    """
    try:
        path = urlparse(reference).path
    except ValueError:
        return "", False

    last_segment = path.rsplit('/', 1)[-1]
    extension, found = get_extension(last_segment)
    if not found or not extension:
        return "", False
    return extension, True
