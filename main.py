# main.py
import logging
from dotenv import load_dotenv
load_dotenv(override=True)

from typing import Callable, Optional, Tuple

import httpx

from dispatch import ChatEndpointClient, DispatchPipeline
from models import Message, SessionView
from settings import Settings
from transcript import TranscriptStore

logger = logging.getLogger(__name__)

SessionListener = Callable[[SessionView], None]


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class ChatSession:
    """One ephemeral chat session: transcript store wired to the dispatch pipeline.

    The rendering surface subscribes to the session and redraws from the
    SessionView it receives on every state change.
    """

    def __init__(self, settings: Optional[Settings] = None, http_client: Optional[httpx.AsyncClient] = None) -> None:
        self.settings = settings or Settings()
        self.store = TranscriptStore(greeting=self.settings.GREETING_TEXT)
        self.client = ChatEndpointClient(self.settings.CHAT_ENDPOINT_URL, http_client=http_client)
        self.pipeline = DispatchPipeline(self.store, self.client, fallback_reply=self.settings.FALLBACK_REPLY)

    @property
    def messages(self) -> Tuple[Message, ...]:
        return self.store.snapshot()

    @property
    def pending(self) -> bool:
        return self.store.pending

    def set_input(self, text: str) -> None:
        self.store.set_input(text)

    async def submit(self, text: Optional[str] = None) -> bool:
        if text is None:
            return await self.pipeline.submit_input()
        return await self.pipeline.submit(text)

    def view(self) -> SessionView:
        pending = self.store.pending
        return SessionView(
            messages=list(self.store.snapshot()),
            is_typing=pending,
            input_text=self.store.input_text,
            input_enabled=not pending,
            send_enabled=self.pipeline.can_submit(self.store.input_text),
            send_label="Sending..." if pending else "Send",
        )

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        return self.store.subscribe(lambda _store: listener(self.view()))

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "ChatSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def create_session(settings: Optional[Settings] = None) -> ChatSession:
    settings = settings or Settings()
    configure_logging(settings.LOG_LEVEL)
    logger.debug("Starting chat session against %s", settings.CHAT_ENDPOINT_URL)
    return ChatSession(settings)
