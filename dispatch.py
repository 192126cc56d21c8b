# dispatch.py
"""One request/response cycle per user submission.

IDLE --submit(text)--> PENDING --reply or failure--> IDLE

Exactly one assistant message is appended per accepted submission and the
pending flag is cleared on every exit path.
"""
import logging
from typing import Optional

import httpx

from models import ChatRequest, ChatResponse, ErrorKind
from transcript import TranscriptStore

logger = logging.getLogger(__name__)


def make_http_client(transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    # no timeout: a hung endpoint keeps the session pending
    return httpx.AsyncClient(timeout=None, follow_redirects=True, transport=transport)


class ChatEndpointClient:
    """POSTs the user's text to the assistant endpoint."""

    def __init__(self, url: str, http_client: Optional[httpx.AsyncClient] = None) -> None:
        self.url = url
        self._client = http_client or make_http_client()

    @property
    def timeout(self) -> httpx.Timeout:
        return self._client.timeout

    @property
    def follow_redirects(self) -> bool:
        return self._client.follow_redirects

    async def send(self, text: str) -> ChatResponse:
        response = await self._client.post(self.url, json=ChatRequest(message=text).model_dump())
        response.raise_for_status()
        return ChatResponse.model_validate(response.json())

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ChatEndpointClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def classify_error(exc: BaseException) -> ErrorKind:
    if isinstance(exc, httpx.TransportError):
        return ErrorKind.NETWORK
    if isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code >= 500:
        return ErrorKind.SERVER
    return ErrorKind.GENERAL


class DispatchPipeline:
    def __init__(self, store: TranscriptStore, client: ChatEndpointClient, fallback_reply: str) -> None:
        self.store = store
        self.client = client
        self.fallback_reply = fallback_reply

    @property
    def pending(self) -> bool:
        return self.store.pending

    def can_submit(self, text: str) -> bool:
        return not self.store.pending and bool(text.strip())

    async def submit_input(self) -> bool:
        return await self.submit(self.store.input_text)

    async def submit(self, text: str) -> bool:
        """Run one dispatch cycle. Returns False when the submission is dropped."""
        if self.store.pending:
            logger.debug("Submission dropped: a request is already in flight")
            return False
        if not text.strip():
            logger.debug("Submission dropped: empty input")
            return False

        self.store.set_pending(True)
        try:
            self.store.append_human(text)
            self.store.clear_input()
            logger.debug("Dispatching message to %s", self.client.url)
            try:
                reply = await self.client.send(text)
            except Exception as e:
                kind = classify_error(e)
                logger.warning("Chat request failed (%s): %s", kind.value, e,
                               exc_info=kind is ErrorKind.GENERAL)
                self.store.append_assistant_error(kind)
            else:
                self.store.append_assistant(reply.message or self.fallback_reply)
        finally:
            self.store.set_pending(False)
        return True
