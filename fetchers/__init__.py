from .resource_fetcher import retrieve_resource, is_html_target

__all__ = ["retrieve_resource", "is_html_target"]
