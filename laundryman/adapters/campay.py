"""Campay mobile money PaymentCollector adapter."""

from __future__ import annotations

import logging
import uuid
from decimal import ROUND_HALF_UP, Decimal

import requests

from laundryman.conf import laundryman_settings
from laundryman.exceptions import LaundrymanError
from laundryman.protocols.payments import CollectionReceipt

logger = logging.getLogger(__name__)


class CampayCollector:
    """
    Adapter that implements PaymentCollector against the Campay REST API.

    Every call has an explicit timeout and is retried once on network
    errors and 5xx responses. Anything else is reported immediately.

    Configuration in settings.py:
        LAUNDRYMAN = {
            "PAYMENT_COLLECTOR_BACKEND": "laundryman.adapters.campay.CampayCollector",
            "CAMPAY_BASE_URL": "https://demo.campay.net/api",
            "CAMPAY_USERNAME": "...",
            "CAMPAY_PASSWORD": "...",
            "CAMPAY_APP_ID": "...",
        }
    """

    def __init__(self, session: requests.Session | None = None):
        self.base_url = laundryman_settings.CAMPAY_BASE_URL.rstrip("/")
        self.username = laundryman_settings.CAMPAY_USERNAME
        self.password = laundryman_settings.CAMPAY_PASSWORD
        self.app_id = laundryman_settings.CAMPAY_APP_ID
        self.timeout = laundryman_settings.PAYMENT_TIMEOUT
        self.retries = max(0, laundryman_settings.PAYMENT_RETRIES)
        self.session = session or requests.Session()
        self.token: str | None = None

    # ------------------------------------------------------------------
    # PaymentCollector
    # ------------------------------------------------------------------

    def collect(self, amount: Decimal, phone_number: str, description: str) -> CollectionReceipt:
        # Campay only takes whole FCFA
        whole = Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        logger.info("Campay collect: %s from %s", whole, phone_number)
        data = self._call(
            "POST",
            "collect/",
            json={
                "amount": str(int(whole)),
                "from": phone_number,
                "description": description,
                "external_reference": uuid.uuid4().hex[:12],
            },
        )
        reference = data.get("reference")
        if not reference:
            raise LaundrymanError(
                "PAYMENT_PROVIDER_ERROR",
                message="Campay did not return a transaction reference",
                response=data,
            )
        return CollectionReceipt(
            reference=reference,
            operator=data.get("operator") or "",
            ussd_code=data.get("ussd_code") or "",
            amount=whole,
        )

    def check_status(self, reference: str) -> str:
        data = self._call("GET", f"transaction/{reference}/")
        return (data.get("status") or "PENDING").upper()

    # ------------------------------------------------------------------
    # HTTP plumbing
    # ------------------------------------------------------------------

    def authenticate(self) -> str:
        """Exchange credentials for an API token."""
        if not self.app_id:
            raise LaundrymanError(
                "PAYMENT_PROVIDER_ERROR",
                message="Campay application id not configured",
            )
        resp = self._send(
            "POST",
            "token/",
            json={
                "username": self.username,
                "password": self.password,
                "app_id": self.app_id,
            },
        )
        if resp.status_code == 401:
            raise LaundrymanError("PAYMENT_PROVIDER_ERROR", message="Invalid Campay credentials")
        token = self._json(resp).get("token")
        if not token:
            raise LaundrymanError("PAYMENT_PROVIDER_ERROR", message="No token received from Campay")
        self.token = token
        return token

    def _call(self, method: str, path: str, **kwargs) -> dict:
        if not self.token:
            self.authenticate()
        resp = self._send(method, path, headers={"Authorization": f"Token {self.token}"}, **kwargs)
        if resp.status_code == 401:
            # Token expired: authenticate again and replay once.
            self.authenticate()
            resp = self._send(method, path, headers={"Authorization": f"Token {self.token}"}, **kwargs)
        return self._json(resp)

    def _send(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}/{path.lstrip('/')}"
        attempts = self.retries + 1
        for attempt in range(attempts):
            try:
                resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
            except requests.RequestException as exc:
                if attempt < attempts - 1:
                    logger.warning("Retrying Campay %s %s after network error: %s", method, path, exc)
                    continue
                raise LaundrymanError(
                    "PAYMENT_PROVIDER_ERROR",
                    message=f"Cannot reach Campay: {exc}",
                ) from exc
            if resp.status_code >= 500 and attempt < attempts - 1:
                logger.warning("Retrying Campay %s %s after HTTP %s", method, path, resp.status_code)
                continue
            return resp

    @staticmethod
    def _json(resp: requests.Response) -> dict:
        try:
            payload = resp.json()
        except ValueError:
            payload = {"message": resp.text}
        if resp.status_code >= 400:
            message = ""
            if isinstance(payload, dict):
                message = payload.get("message") or payload.get("detail") or ""
            raise LaundrymanError(
                "PAYMENT_PROVIDER_ERROR",
                message=message or f"Campay returned HTTP {resp.status_code}",
                status=resp.status_code,
            )
        return payload if isinstance(payload, dict) else {}
