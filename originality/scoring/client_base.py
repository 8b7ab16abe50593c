import math
from typing import Any

import httpx

from originality.scoring.base import BaseOriginalityProvider
from originality.scoring.exceptions import (
    ProviderAuthError,
    ProviderMalformedResponseError,
    ProviderNetworkError,
    ProviderTimeoutError,
)
from originality.scoring.models import MatchedSource


class HttpOriginalityProvider(BaseOriginalityProvider):
    """Shared plumbing for providers reached over HTTP with httpx."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: float,
        client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout_seconds)
        self._timeout = timeout_seconds

    def close(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            self._client.close()

    def _require_api_key(self) -> str:
        if not self._api_key:
            raise ProviderAuthError(f"{self.name}: no API key configured")
        return self._api_key

    def _request_json(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        """Send a JSON request and return the decoded JSON body.

        Raises:
            ProviderTimeoutError: if the request times out.
            ProviderNetworkError: on transport errors or non-2xx statuses.
            ProviderAuthError: on 401/403 responses.
            ProviderMalformedResponseError: if the body is not JSON.
        """
        try:
            response = self._client.request(
                method, url, headers=headers, json=payload, timeout=self._timeout
            )
        except httpx.TimeoutException as exc:
            raise ProviderTimeoutError(f"{self.name} timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise ProviderNetworkError(f"{self.name} network error: {exc}") from exc

        if response.status_code in (401, 403):
            raise ProviderAuthError(
                f"{self.name} rejected credentials: HTTP {response.status_code}"
            )
        if not response.is_success:
            raise ProviderNetworkError(f"{self.name} error: HTTP {response.status_code}")
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ProviderMalformedResponseError(
                f"{self.name} returned invalid JSON: {exc}"
            ) from exc


def require_object(data: Any, provider: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ProviderMalformedResponseError(f"{provider} response must be a JSON object")
    return data


def _is_finite_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def first_number(data: dict[str, Any], keys: tuple[str, ...], provider: str) -> float:
    """Value of the first present key, which must be a finite number."""
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if not _is_finite_number(value):
            raise ProviderMalformedResponseError(
                f"{provider}: '{key}' must be a finite number"
            )
        return float(value)
    raise ProviderMalformedResponseError(
        f"{provider}: response has none of {list(keys)}"
    )


def parse_sources(
    raw: Any,
    provider: str,
    *,
    url_keys: tuple[str, ...],
    similarity_keys: tuple[str, ...],
) -> list[MatchedSource]:
    """Build MatchedSource records from a provider's list of match objects."""
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ProviderMalformedResponseError(f"{provider}: sources must be a list")
    sources: list[MatchedSource] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ProviderMalformedResponseError(
                f"{provider}: source at index {index} must be an object"
            )
        url = next((item[k] for k in url_keys if isinstance(item.get(k), str)), None)
        if url is None:
            raise ProviderMalformedResponseError(
                f"{provider}: source at index {index} has no url"
            )
        similarity = 0.0
        for key in similarity_keys:
            value = item.get(key)
            if value is None:
                continue
            if not _is_finite_number(value):
                raise ProviderMalformedResponseError(
                    f"{provider}: source at index {index} '{key}' must be a finite number"
                )
            similarity = float(value)
            break
        title = item.get("title")
        sources.append(
            MatchedSource(
                url=url,
                similarity_percent=similarity,
                title=title if isinstance(title, str) else None,
            )
        )
    return sources
