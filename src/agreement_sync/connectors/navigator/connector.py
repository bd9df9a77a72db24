"""Navigator connector: bearer-authenticated JSON API for agreement records.

The list endpoint returns coarse records; the detail endpoint returns the full
record including the customFields map. Both require an access token issued by
the OAuth handshake (see agreement_sync.auth).
"""

import logging
from typing import Any, Optional

import httpx

from agreement_sync.auth import Credential
from agreement_sync.connectors.base import BaseConnector
from agreement_sync.errors import (
    AuthenticationMissing,
    UpstreamDetailFetchFailed,
    UpstreamFetchFailed,
)
from agreement_sync.models.raw import RawAgreement

from .constants import AGREEMENT_DETAIL_PATH, AGREEMENTS_PATH, DEFAULT_BASE_URL
from .parsers import agreement_from_detail_payload, agreements_from_payload

logger = logging.getLogger(__name__)


class NavigatorConnector(BaseConnector):
    """
    Connector for the Navigator agreements API.
    Errors from the list call raise UpstreamFetchFailed; from the detail call,
    UpstreamDetailFetchFailed.
    """

    source_id = "navigator"

    DEFAULT_HEADERS = {
        "User-Agent": "agreement-sync/0.1",
        "Accept": "application/json",
        "Content-Type": "application/json",
    }

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        timeout: float = 30.0,
        credential: Optional[Credential] = None,
    ):
        self._base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self._client = client or httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            headers=self.DEFAULT_HEADERS,
        )
        self._credential = credential

    @property
    def base_url(self) -> str:
        return self._base_url

    def authenticate(self, credential: Credential) -> None:
        self._credential = credential

    def _auth_headers(self) -> dict[str, str]:
        if self._credential is None:
            raise AuthenticationMissing("Navigator request attempted without a credential")
        return {"Authorization": self._credential.authorization_header}

    def _get_json(self, path: str, params: Optional[dict] = None) -> Any:
        """GET a JSON document. Raises httpx errors and ValueError for non-JSON bodies."""
        resp = self._client.get(self._base_url + path, params=params, headers=self._auth_headers())
        resp.raise_for_status()
        return resp.json()

    def search(
        self,
        query: Optional[str] = None,
        filters: Optional[dict] = None,
    ) -> list[RawAgreement]:
        """
        Fetch the agreement list.
        query: optional keyword filter (applied client-side to title/name)
        filters: passed through as query parameters
        """
        url = self._base_url + AGREEMENTS_PATH
        try:
            payload = self._get_json(AGREEMENTS_PATH, params=filters or None)
        except httpx.HTTPStatusError as e:
            logger.warning("Navigator API error: %s %s", e.response.status_code, e.response.reason_phrase)
            raise UpstreamFetchFailed(
                f"Navigator API error: {e.response.status_code}",
                {"url": url, "status_code": e.response.status_code},
            ) from e
        except httpx.RequestError as e:
            logger.warning("Navigator request failed: %s", e)
            raise UpstreamFetchFailed(f"Navigator request failed: {e}", {"url": url}) from e
        except ValueError as e:
            raise UpstreamFetchFailed("Navigator returned a non-JSON response", {"url": url}) from e

        raw_list = agreements_from_payload(payload)
        logger.info("Retrieved %d agreements from Navigator", len(raw_list))

        if query:
            q = query.lower()
            raw_list = [
                r
                for r in raw_list
                if q in str(r.data.get("name") or "").lower()
                or q in str(r.custom_fields.get("title") or r.data.get("title") or "").lower()
            ]
        return raw_list

    def fetch_details(self, raw_id: str) -> RawAgreement:
        """Fetch one agreement by Navigator ID."""
        path = AGREEMENT_DETAIL_PATH.format(agreement_id=raw_id)
        try:
            payload = self._get_json(path)
        except httpx.HTTPStatusError as e:
            raise UpstreamDetailFetchFailed(
                raw_id,
                f"Navigator API error: {e.response.status_code}",
                {"status_code": e.response.status_code},
            ) from e
        except httpx.RequestError as e:
            raise UpstreamDetailFetchFailed(raw_id, f"Navigator request failed: {e}") from e
        except ValueError as e:
            raise UpstreamDetailFetchFailed(raw_id, "Navigator returned a non-JSON response") from e

        raw = agreement_from_detail_payload(payload)
        if raw is None:
            raise UpstreamDetailFetchFailed(raw_id, "Navigator detail response is not an object")
        return raw
