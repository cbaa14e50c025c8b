import logging
from typing import Optional
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)


def in_scope(candidate: str, seed_scheme: str) -> bool:
    """True iff `candidate` uses the same scheme as the seed."""
    try:
        return urlsplit(candidate).scheme == seed_scheme
    except ValueError:
        logger.debug("Unparseable candidate %r treated as out of scope", candidate)
        return False


class ScopeFilter:
    """Decides which discovered links the crawl may follow.

    Scheme equality with the seed is the only rule unless `same_host` is set,
    in which case the candidate's host must also equal the seed's host.
    """

    def __init__(self, same_host: bool = False):
        self.same_host = same_host

    def admits(self, candidate: str, seed_scheme: str, seed_host: Optional[str] = None) -> bool:
        if not in_scope(candidate, seed_scheme):
            logger.debug("Skipping (scheme) %s -> not %s", candidate, seed_scheme)
            return False
        if self.same_host:
            try:
                host = urlsplit(candidate).hostname
            except ValueError:
                return False
            if host != seed_host:
                logger.debug("Skipping (external) %s -> not same host as %s", candidate, seed_host)
                return False
        return True
