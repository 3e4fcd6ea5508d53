# Per-page metadata produced by a single fetch
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List


@dataclass
class PageData:
    """
    Links and saved asset paths of one mirrored page.

    Only populated when the fetched resource was HTML. The asset lists hold
    local paths of files that were actually written; assets that failed are
    described in `warnings` instead.
    """
    links: List[str] = field(default_factory=list)
    images: List[str] = field(default_factory=list)
    stylesheets: List[str] = field(default_factory=list)
    javascripts: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    fetched_at: datetime = field(default_factory=datetime.now)

    def counts(self) -> Dict[str, int]:
        """Counts keyed by the names used in the metadata report."""
        return {
            'images': len(self.images),
            'javascript': len(self.javascripts),
            'stylesheet': len(self.stylesheets),
            'num_links': len(self.links),
        }
