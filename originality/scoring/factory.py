import random

import httpx

from originality.config.settings import Settings
from originality.scoring.base import BaseOriginalityProvider
from originality.scoring.copyleaks_adapter import CopyleaksProvider
from originality.scoring.engine import ScoringEngine
from originality.scoring.local_heuristic import LocalHeuristicProvider
from originality.scoring.plagiarism_detector_adapter import PlagiarismDetectorProvider
from originality.scoring.rapidapi_adapter import RapidApiProvider


class ScoringEngineFactory:
    """Creates the ScoringEngine for the configured provider."""

    PROVIDERS: tuple[str, ...] = ("mock", "copyleaks", "rapidapi", "plagiarismdetector")

    @classmethod
    def create(
        cls,
        settings: Settings,
        *,
        rng: random.Random | None = None,
        client: httpx.Client | None = None,
    ) -> ScoringEngine:
        """Select the provider once; the fallback is always the local heuristic."""
        fallback = LocalHeuristicProvider(rng=rng)
        provider_name = settings.plagiarism_api_provider.strip().lower()
        if provider_name == "mock":
            return ScoringEngine(fallback, fallback)
        provider = cls._create_provider(provider_name, settings, client)
        return ScoringEngine(provider, fallback)

    @classmethod
    def _create_provider(
        cls,
        provider_name: str,
        settings: Settings,
        client: httpx.Client | None,
    ) -> BaseOriginalityProvider:
        url_override = settings.plagiarism_api_url.strip() or None
        timeout = settings.provider_timeout_seconds
        if provider_name == "copyleaks":
            return CopyleaksProvider(
                api_key=settings.plagiarism_api_key,
                email=settings.copyleaks_email,
                public_base_url=settings.public_base_url,
                timeout_seconds=timeout,
                api_url=url_override,
                client=client,
            )
        if provider_name == "rapidapi":
            return RapidApiProvider(
                api_key=settings.plagiarism_api_key,
                timeout_seconds=timeout,
                url=url_override,
                client=client,
            )
        if provider_name == "plagiarismdetector":
            return PlagiarismDetectorProvider(
                api_key=settings.plagiarism_api_key,
                timeout_seconds=timeout,
                url=url_override,
                client=client,
            )
        raise ValueError(
            f"Unknown plagiarism provider '{provider_name}'. Choose from: {list(cls.PROVIDERS)}"
        )
