# Exception types raised while mirroring a page or one of its assets


class MirrorError(Exception):
    """Base class for every failure that aborts a single fetch."""

    def __init__(self, message, url=None):
        super().__init__(message)
        self.url = url


class TransportError(MirrorError):
    """Network, DNS or timeout failure while issuing the request."""


class StatusError(MirrorError):
    """Non-2xx response for a resource that requires a successful status."""

    def __init__(self, message, url=None, status_code=None):
        super().__init__(message, url=url)
        self.status_code = status_code


class FilesystemError(MirrorError):
    """Directory or file creation failed, or writing the body failed."""

    def __init__(self, message, url=None, path=None):
        super().__init__(message, url=url)
        self.path = path


class ParseError(MirrorError):
    """The HTML body could not be parsed."""


class SerializationError(MirrorError):
    """The rewritten document could not be turned back into markup."""


class ResolutionError(MirrorError):
    """A reference could not be resolved against the page's base URL."""
