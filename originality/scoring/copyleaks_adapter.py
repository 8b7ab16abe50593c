import base64
import secrets

import httpx

from originality.logging.logger import Log
from originality.scoring.client_base import HttpOriginalityProvider, require_object
from originality.scoring.exceptions import ProviderAuthError, ProviderMalformedResponseError
from originality.scoring.models import ScoreResult


def webhook_url(public_base_url: str, scan_id: str) -> str:
    """Status webhook the provider calls when the scan finishes."""
    return f"{public_base_url.rstrip('/')}/api/plagiarism/webhook/{scan_id}"


class CopyleaksProvider(HttpOriginalityProvider):
    """Asynchronous scanner: log in, submit the text, receive results by webhook.

    A successful submission returns a pending ScoreResult. The final score is
    delivered to the status webhook, which the surrounding web layer owns.
    """

    name = "Copyleaks"

    LOGIN_URL = "https://id.copyleaks.com/v3/account/login/api"
    API_URL = "https://api.copyleaks.com"

    def __init__(
        self,
        *,
        api_key: str,
        email: str,
        public_base_url: str,
        timeout_seconds: float,
        api_url: str | None = None,
        login_url: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        super().__init__(api_key=api_key, timeout_seconds=timeout_seconds, client=client)
        self._email = email
        self._public_base_url = public_base_url
        self._api_url = (api_url or self.API_URL).rstrip("/")
        self._login_url = login_url or self.LOGIN_URL

    def score(self, text: str) -> ScoreResult:
        access_token = self._login()
        scan_id = f"scan-{secrets.token_hex(12)}"
        self._request_json(
            "PUT",
            f"{self._api_url}/v3/scans/submit/file/{scan_id}",
            headers={"Authorization": f"Bearer {access_token}"},
            payload={
                "base64": base64.b64encode(text.encode("utf-8")).decode("ascii"),
                "filename": "submission.txt",
                "properties": {
                    "webhooks": {"status": webhook_url(self._public_base_url, scan_id)},
                },
            },
        )
        Log.info(f"{self.name} scan submitted, awaiting webhook", scan_id=scan_id)
        return ScoreResult.pending(provider_name=self.name, scan_id=scan_id)

    def _login(self) -> str:
        api_key = self._require_api_key()
        if not self._email:
            raise ProviderAuthError(f"{self.name}: no account email configured")
        data = require_object(
            self._request_json(
                "POST",
                self._login_url,
                payload={"email": self._email, "key": api_key},
            ),
            self.name,
        )
        token = data.get("access_token")
        if not isinstance(token, str) or not token:
            raise ProviderMalformedResponseError(f"{self.name}: login returned no access_token")
        return token
