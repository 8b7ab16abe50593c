import httpx

from originality.scoring.client_base import (
    HttpOriginalityProvider,
    first_number,
    parse_sources,
    require_object,
)
from originality.scoring.models import ScoreResult


class RapidApiProvider(HttpOriginalityProvider):
    """Synchronous plagiarism checker published on RapidAPI."""

    name = "RapidAPI"

    DEFAULT_URL = (
        "https://plagiarism-checker-and-auto-citation-generator-multi-lingual"
        ".p.rapidapi.com/plagiarism"
    )

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: float,
        url: str | None = None,
        language: str = "en",
        client: httpx.Client | None = None,
    ) -> None:
        super().__init__(api_key=api_key, timeout_seconds=timeout_seconds, client=client)
        self._url = url or self.DEFAULT_URL
        self._language = language

    def score(self, text: str) -> ScoreResult:
        api_key = self._require_api_key()
        data = require_object(
            self._request_json(
                "POST",
                self._url,
                headers={
                    "x-rapidapi-key": api_key,
                    "x-rapidapi-host": httpx.URL(self._url).host,
                },
                payload={
                    "text": text,
                    "language": self._language,
                    "includeCitations": False,
                    "scrapeSources": False,
                },
            ),
            self.name,
        )
        return ScoreResult(
            score=first_number(data, ("percentPlagiarism",), self.name),
            provider_name=self.name,
            sources=parse_sources(
                data.get("sources"),
                self.name,
                url_keys=("url",),
                similarity_keys=("percent",),
            ),
        )
