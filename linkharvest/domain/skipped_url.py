from typing import NamedTuple

STAGE_FETCH = "fetch"
STAGE_EXTRACT = "extract"


class SkippedUrl(NamedTuple):
    """A URL the crawl gave up on, with the reason it was dropped."""
    url: str
    reason: str
    stage: str = STAGE_FETCH
