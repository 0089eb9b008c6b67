"""Exception hierarchy for WingIt.

``InvalidInputError`` is the only error the recommendation engine raises.
Everything else comes from the collaborators around it (file loaders and the
eBird client) and is kept distinct so callers can tell a bad request apart
from an upstream failure.
"""

from __future__ import annotations


class WingitError(Exception):
    """Base class for all WingIt errors."""


class InvalidInputError(WingitError, ValueError):
    """The caller supplied a request that cannot be processed (e.g. blank location)."""


class DataLoadError(WingitError):
    """A personal checklist or recent-observation snapshot could not be read or decoded."""


# ── eBird API ──────────────────────────────────────────────────────────────────


class EBirdError(WingitError):
    """Generic eBird failure: transport error, unexpected status, undecodable body."""


class UnauthorizedError(EBirdError):
    """Missing or rejected API token (HTTP 401/403)."""


class RateLimitedError(EBirdError):
    """eBird asked us to slow down (HTTP 429)."""


class BadRequestError(EBirdError):
    """eBird rejected the query parameters (HTTP 400)."""
