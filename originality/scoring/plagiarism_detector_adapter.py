import httpx

from originality.scoring.client_base import (
    HttpOriginalityProvider,
    first_number,
    parse_sources,
    require_object,
)
from originality.scoring.models import ScoreResult


class PlagiarismDetectorProvider(HttpOriginalityProvider):
    """Synchronous REST checker authenticated with a bearer key."""

    name = "Plagiarism Detector"

    DEFAULT_URL = "https://api.plagiarismdetector.com/v1/check"

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: float,
        url: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        super().__init__(api_key=api_key, timeout_seconds=timeout_seconds, client=client)
        self._url = url or self.DEFAULT_URL

    def score(self, text: str) -> ScoreResult:
        api_key = self._require_api_key()
        data = require_object(
            self._request_json(
                "POST",
                self._url,
                headers={"Authorization": f"Bearer {api_key}"},
                payload={"text": text},
            ),
            self.name,
        )
        raw_sources = data.get("matches")
        if raw_sources is None:
            raw_sources = data.get("sources")
        return ScoreResult(
            score=first_number(data, ("plagiarismScore", "score"), self.name),
            provider_name=self.name,
            sources=parse_sources(
                raw_sources,
                self.name,
                url_keys=("url", "source"),
                similarity_keys=("similarity", "percentage"),
            ),
        )
