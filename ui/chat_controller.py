from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import ui_config as cfg
from ui_context import ContextItem, ContextStore
from ui_errors import ChatRejected
from ui_results import ModelResult
from ui_prompt import assemble_prompt


PLACEHOLDER_TEXT = "..."


class MessageKind(Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    ERROR = "error"


@dataclass(frozen=True)
class Message:
    kind: MessageKind
    content: str
    pending: bool = False


class SessionState(Enum):
    IDLE = "idle"
    SENDING = "sending"


@dataclass(frozen=True)
class PendingRequest:
    question: str
    prompt: str
    model: str
    placeholder: Message


@dataclass(frozen=True)
class SubmitResult:
    ok: bool
    message: Message


def describe_error(exc: BaseException) -> str:
    text = str(exc).strip()
    return text or type(exc).__name__


class ChatSession:
    """
    One chat window's worth of state: the transcript, the single in-flight
    request guard and the model selection.

    The request lifecycle is IDLE -> SENDING -> IDLE. `begin` moves to SENDING
    and shows a placeholder reply; `finish`/`fail` always swap the placeholder
    for a terminal message and return to IDLE.
    """

    def __init__(
        self,
        store: ContextStore | None = None,
        default_model: str = cfg.DEFAULT_MODEL,
        on_change: Callable[["ChatSession"], None] | None = None,
    ):
        self.store = store if store is not None else ContextStore()
        self.default_model = default_model
        self.selected_model = default_model
        self.available_models: list[str] = []
        self.transcript: list[Message] = []
        self.state = SessionState.IDLE
        self.on_change = on_change
        self._state_lock = threading.Lock()

    @property
    def in_flight(self) -> bool:
        return self.state is SessionState.SENDING

    def _changed(self) -> None:
        if self.on_change is None:
            return
        try:
            self.on_change(self)
        except Exception as exc:
            print(f"[chat] change listener failed: {exc}")

    def _append(self, kind: MessageKind, content: str) -> Message:
        msg = Message(kind, content)
        self.transcript.append(msg)
        self._changed()
        return msg

    def notify(self, text: str) -> Message:
        return self._append(MessageKind.SYSTEM, text)

    def report_error(self, text: str) -> Message:
        return self._append(MessageKind.ERROR, text)

    # context

    def add_context(self, items: list[ContextItem], skipped: int = 0, empty: int = 0) -> int:
        added = self.store.extend(items)
        if items:
            self.notify(f"Loaded {len(items)} files successfully.")
        if skipped:
            self.notify(f"Skipped {skipped} file(s) that could not be read.")
        if empty:
            self.notify(f"No text found in {empty} file(s).")
        return added

    def remove_context(self, index: int) -> ContextItem:
        item = self.store.remove(index)
        self._changed()
        return item

    def clear_context(self) -> None:
        self.store.clear()
        self.notify("Context cleared.")

    # models

    def select_model(self, model_id: str | None) -> None:
        self.selected_model = (model_id or "").strip() or self.default_model

    def refresh_models(self, client) -> str:
        try:
            result = client.list_models()
        except Exception as exc:
            result = ModelResult.failure(describe_error(exc))

        if not result.ok:
            return f"Could not load models: {result.error}"
        if not result.models:
            self.available_models = []
            self.selected_model = self.default_model
            self._changed()
            return f"No models installed; using {self.default_model}."

        self.available_models = list(result.models)
        if self.selected_model not in self.available_models:
            self.selected_model = self.available_models[0]
        self._changed()
        return f"{len(self.available_models)} model(s) available."

    def check_connection(self, client) -> tuple[bool, str]:
        try:
            result = client.check_connection()
        except Exception as exc:
            result = ModelResult.failure(describe_error(exc))
        if result.ok:
            return True, "Connected to Ollama"
        return False, result.error

    # request lifecycle

    def begin(self, question: str) -> PendingRequest:
        # check and claim happen under one lock
        with self._state_lock:
            if self.in_flight:
                raise ChatRejected("Wait for the current response to finish.")
            if not (question or "").strip():
                raise ChatRejected("Message cannot be empty.")
            self.state = SessionState.SENDING

        try:
            prompt = assemble_prompt(self.store.items, question)
        except Exception:
            self.state = SessionState.IDLE
            raise
        model = self.selected_model or self.default_model
        placeholder = Message(MessageKind.ASSISTANT, PLACEHOLDER_TEXT, pending=True)

        self.transcript.append(Message(MessageKind.USER, question))
        self.transcript.append(placeholder)
        cfg.debug_log("chat", f"sending {len(prompt)} chars to {model} with {self.store.count} context file(s)")
        self._changed()
        return PendingRequest(question=question, prompt=prompt, model=model, placeholder=placeholder)

    def _drop_placeholder(self, pending: PendingRequest) -> bool:
        for idx, msg in enumerate(self.transcript):
            if msg is pending.placeholder:
                del self.transcript[idx]
                return True
        return False

    def _complete(self, pending: PendingRequest, message: Message) -> Message:
        if not self._drop_placeholder(pending) and not self.in_flight:
            print("[chat] ignoring completion for a request that already finished")
            return message
        self.transcript.append(message)
        self.state = SessionState.IDLE
        self._changed()
        return message

    def finish(self, pending: PendingRequest, result: ModelResult) -> Message:
        try:
            if result.ok:
                message = Message(MessageKind.ASSISTANT, result.content or "")
            else:
                message = Message(MessageKind.ERROR, f"Error: {result.error}")
        except AttributeError as exc:
            message = Message(MessageKind.ERROR, f"Error: malformed model result ({describe_error(exc)})")
        return self._complete(pending, message)

    def fail(self, pending: PendingRequest, exc: BaseException) -> Message:
        return self._complete(pending, Message(MessageKind.ERROR, f"Error: {describe_error(exc)}"))

    def dispatch(self, pending: PendingRequest, client) -> SubmitResult:
        message = None
        try:
            result = client.chat(pending.prompt, pending.model)
            message = self.finish(pending, result)
        except Exception as exc:
            print(f"[chat] model client raised: {exc!r}")
            message = self.fail(pending, exc)
        finally:
            if self.in_flight:
                self._drop_placeholder(pending)
                self.state = SessionState.IDLE
                self._changed()
        return SubmitResult(ok=message.kind is MessageKind.ASSISTANT, message=message)

    def submit(self, question: str, client) -> SubmitResult:
        pending = self.begin(question)
        return self.dispatch(pending, client)

    def submit_in_background(self, question: str, client, on_done: Callable[[SubmitResult], None] | None = None) -> threading.Thread:
        """Reject synchronously, then run the model call on a daemon worker thread."""
        pending = self.begin(question)

        def worker() -> None:
            outcome = self.dispatch(pending, client)
            if on_done is not None:
                on_done(outcome)

        t = threading.Thread(target=worker, daemon=True)
        t.start()
        return t
