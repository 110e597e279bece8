"""Blocking HTTP client for an OpenAI-compatible chat-completion endpoint."""

from __future__ import annotations

import logging

import requests
from pydantic import ValidationError

from .models import ChatMessage, ChatRequest, decode_completion

logger = logging.getLogger(__name__)


class CompletionError(RuntimeError):
    """A model call that produced no usable reply."""


class PayloadError(CompletionError):
    pass


class TransportError(CompletionError):
    pass


class ResponseParseError(CompletionError):
    pass


class ApiError(CompletionError):
    """Error reported by the service itself."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Error from AI service: {message}")
        self.api_message = message


class MalformedResponseError(CompletionError):
    pass


class CompletionClient:
    """Issue one POST per call and return the assistant's reply text.

    No retries and no authentication; ``timeout=None`` leaves the transport default.
    """

    def __init__(
        self,
        endpoint: str,
        model: str,
        *,
        temperature: float = 0.3,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.model = model
        self.temperature = temperature
        self.timeout = timeout
        self._session = session or requests.Session()

    def build_request(self, system: str, user: str) -> ChatRequest:
        try:
            return ChatRequest(
                model=self.model,
                messages=[
                    ChatMessage(role="system", content=system),
                    ChatMessage(role="user", content=user),
                ],
                temperature=self.temperature,
            )
        except ValidationError as e:
            raise PayloadError(f"Failed to create JSON payload: {e}") from e

    def complete(self, system: str, user: str, *, label: str = "request") -> str | None:
        """Return reply text, or None when the body holds no content."""
        body = self.build_request(system, user).model_dump_json()

        try:
            resp = self._session.post(
                self.endpoint,
                data=body.encode("utf-8"),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except (requests.exceptions.ChunkedEncodingError, requests.exceptions.ContentDecodingError) as e:
            raise TransportError(f"Failed to read response: {e}") from e
        except requests.RequestException as e:
            raise TransportError(f"Failed to send request: {e}") from e

        logger.debug("Raw response for %s: %s", label, resp.text)

        try:
            payload = resp.json()
        except ValueError as e:
            if not resp.ok:
                raise ResponseParseError(
                    f"Failed to parse response: AI service returned HTTP {resp.status_code}"
                ) from e
            raise ResponseParseError(f"Failed to parse response: {e}") from e

        decoded = decode_completion(payload)
        if decoded.kind == "api_error":
            raise ApiError(decoded.error or "Unknown error")
        if decoded.kind == "malformed":
            raise MalformedResponseError(f"Unexpected response shape: {decoded.error}")
        if decoded.kind == "empty" and not resp.ok:
            raise ApiError(f"HTTP {resp.status_code}")
        return decoded.content

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> CompletionClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def client_for(cfg) -> CompletionClient:
    """Build a client from an analyzer or enhancer config."""
    return CompletionClient(
        cfg.endpoint,
        cfg.model,
        temperature=cfg.temperature,
        timeout=cfg.request_timeout,
    )
