"""eBird API 2.0 client.

Only the endpoint WingIt needs is wrapped:

    GET /v2/data/obs/geo/recent   recent observations near a point

eBird documents ``back`` as 1–30 days and ``dist`` as 0–50 km; values
outside those ranges are clamped before the request goes out.
"""

from __future__ import annotations

import logging
from typing import Optional

import requests
from pydantic import ValidationError

from wingit.errors import BadRequestError, EBirdError, RateLimitedError, UnauthorizedError
from wingit.models import RECENT_OBSERVATIONS, RecentObservation

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.ebird.org"
DEFAULT_USER_AGENT = "wingit/0.2.0"
RECENT_NEARBY_PATH = "/v2/data/obs/geo/recent"

#: Upper bound on how much of an error body is echoed into exception messages.
_MAX_ERROR_BODY = 64 * 1024


def _clamp(value, low, high):
    return max(low, min(high, value))


class EBirdClient:
    """Thin request/decode wrapper around the eBird API.

    The ``requests.Session`` is lazy-initialised so the client can be built
    without network access (tests inject a mocked session instead).
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 15.0,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.token = (token or "").strip()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent
        self._session = session

    @property
    def session(self) -> requests.Session:
        """Lazy-initialise and return the HTTP session."""
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def recent_nearby(
        self,
        lat: float,
        lng: float,
        dist_km: float,
        back_days: int,
        max_results: int = 0,
    ) -> list[RecentObservation]:
        """Fetch recent observations around a point.

        Args:
            lat: Latitude in decimal degrees.
            lng: Longitude in decimal degrees.
            dist_km: Search radius; clamped to 0–50.
            back_days: Lookback window; clamped to 1–30.
            max_results: Result cap; values below 1 leave it to eBird.

        Returns:
            Observations in the order eBird returned them.

        Raises:
            UnauthorizedError: Missing token, or HTTP 401/403.
            RateLimitedError: HTTP 429.
            BadRequestError: HTTP 400.
            EBirdError: Any other transport, status or decode failure.
        """
        if not self.token:
            raise UnauthorizedError("ebird: unauthorized: missing API token")

        params: dict[str, str] = {
            "lat": f"{lat:.2f}",
            "lng": f"{lng:.2f}",
            "dist": f"{_clamp(dist_km, 0, 50):g}",
            "back": str(_clamp(back_days, 1, 30)),
            "sort": "date",
        }
        if max_results >= 1:
            params["maxResults"] = str(max_results)

        headers = {"X-eBirdApiToken": self.token}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent

        url = self.base_url + RECENT_NEARBY_PATH
        logger.info("eBird recent nearby lat=%s lng=%s dist=%s back=%s",
                    params["lat"], params["lng"], params["dist"], params["back"])

        try:
            resp = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise EBirdError(f"ebird: request failed: {exc}") from exc

        if resp.status_code != 200:
            msg = (resp.text or "")[:_MAX_ERROR_BODY].strip()
            if resp.status_code in (401, 403):
                raise UnauthorizedError(f"ebird: unauthorized (bad token?): {msg}")
            if resp.status_code == 429:
                raise RateLimitedError(f"ebird: rate limited: {msg}")
            if resp.status_code == 400:
                raise BadRequestError(f"ebird: bad request: {msg}")
            raise EBirdError(f"ebird: http {resp.status_code}: {msg}")

        try:
            observations = RECENT_OBSERVATIONS.validate_json(resp.content)
        except ValidationError as exc:
            raise EBirdError(f"ebird: decode response: {exc}") from exc

        logger.info("eBird returned %d observations", len(observations))
        return observations
