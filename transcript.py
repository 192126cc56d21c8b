# transcript.py
"""Session state container: the ordered message log, the pending flag and the
input buffer. Only append and read operations are exposed for messages.
"""
import itertools
import logging
from typing import Callable, List, Optional, Tuple

from models import ErrorKind, Message, Sender, error_text

logger = logging.getLogger(__name__)

Listener = Callable[["TranscriptStore"], None]


class TranscriptStore:
    def __init__(self, greeting: str) -> None:
        self._ids = itertools.count(1)
        self._messages: List[Message] = []
        self._pending = False
        self._input_text = ""
        self._listeners: List[Listener] = []
        self._append(greeting, Sender.ASSISTANT)

    def __len__(self) -> int:
        return len(self._messages)

    @property
    def pending(self) -> bool:
        return self._pending

    @property
    def input_text(self) -> str:
        return self._input_text

    def snapshot(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    # --- appends ---

    def append_human(self, text: str) -> Optional[Message]:
        if not text.strip():
            return None
        return self._append(text, Sender.HUMAN)

    def append_assistant(self, text: str) -> Message:
        return self._append(text, Sender.ASSISTANT)

    def append_assistant_error(self, kind: ErrorKind) -> Message:
        return self._append(error_text(kind), Sender.ASSISTANT, error_kind=kind)

    def _append(self, text: str, sender: Sender, error_kind: Optional[ErrorKind] = None) -> Message:
        message = Message(
            id=str(next(self._ids)),
            text=text,
            sender=sender,
            is_error=error_kind is not None,
            error_kind=error_kind,
        )
        self._messages.append(message)
        self._notify()
        return message

    # --- pending flag & input buffer ---

    def set_pending(self, pending: bool) -> None:
        if pending == self._pending:
            return
        self._pending = pending
        self._notify()

    def set_input(self, text: str) -> None:
        self._input_text = text
        self._notify()

    def clear_input(self) -> None:
        self.set_input("")

    # --- listeners ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called after every state change.

        Returns a callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                # listener failures never reach the caller
                logger.exception("Transcript listener %r failed", listener)
