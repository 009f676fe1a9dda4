from __future__ import annotations

import requests
from pydantic import ValidationError

import ui_config as cfg
import ui_schemas as sch
from ui_errors import ModelFailure
from ui_results import ModelResult


CONNECTION_HINT = "Cannot connect to Ollama. Make sure Ollama is running."


def _error_detail(resp) -> str:
    try:
        return sch.ErrorResponse.model_validate(resp.json()).error.strip() or "Unknown error"
    except ValueError:
        pass
    detail = (getattr(resp, "text", "") or "").strip()
    return detail or (getattr(resp, "reason", "") or "Unknown error")


class ModelClient:
    """
    Thin client for a local Ollama server.

    Every public call returns a ModelResult. Transport errors, bad statuses and
    payloads that do not match the schemas are folded into a failed result so
    callers never see a requests exception.
    """

    def __init__(
        self,
        host: str = cfg.OLLAMA_HOST,
        default_model: str = cfg.DEFAULT_MODEL,
        *,
        connect_timeout_s: float = cfg.CONNECT_TIMEOUT_S,
        read_timeout_s: float | None = cfg.READ_TIMEOUT_S,
        health_timeout_s: float = cfg.HEALTH_TIMEOUT_S,
        http=None,
    ):
        self.host = (host or "").rstrip("/")
        self.default_model = default_model
        self.connect_timeout_s = connect_timeout_s
        self.read_timeout_s = read_timeout_s
        self.health_timeout_s = health_timeout_s
        self._http = http if http is not None else requests.Session()

    def _request(self, method: str, path: str, *, timeout, payload: dict | None = None):
        url = f"{self.host}{path}"
        try:
            resp = self._http.request(method, url, json=payload, timeout=timeout)
        except requests.exceptions.Timeout as exc:
            raise ModelFailure(f"Request to {url} timed out.") from exc
        except requests.exceptions.ConnectionError as exc:
            raise ModelFailure(f"{CONNECTION_HINT} ({self.host})") from exc
        except requests.exceptions.RequestException as exc:
            raise ModelFailure(f"Request failed: {exc}") from exc

        if not resp.ok:
            raise ModelFailure(f"Model server error {resp.status_code}: {_error_detail(resp)}")
        try:
            return resp.json()
        except ValueError as exc:
            raise ModelFailure(f"Malformed response from {path}: body is not JSON.") from exc

    def chat(self, prompt: str, model: str | None = None) -> ModelResult:
        model_id = (model or "").strip() or self.default_model
        body = sch.ChatRequest(
            model=model_id,
            messages=[sch.ChatMessage(role="user", content=prompt or "")],
            stream=False,
        )
        cfg.debug_log("ollama", f"chat model={model_id} prompt_chars={len(prompt or '')}")
        try:
            data = self._request(
                "POST",
                "/api/chat",
                timeout=(self.connect_timeout_s, self.read_timeout_s),
                payload=body.model_dump(),
            )
            try:
                parsed = sch.ChatResponse.model_validate(data)
            except ValidationError as exc:
                raise ModelFailure("Malformed response from /api/chat: missing message content.") from exc
        except ModelFailure as exc:
            print(f"[ollama] chat failed: {exc}")
            return ModelResult.failure(str(exc))
        return ModelResult(ok=True, content=parsed.message.content)

    def list_models(self) -> ModelResult:
        try:
            data = self._request("GET", "/api/tags", timeout=(self.connect_timeout_s, self.health_timeout_s))
            try:
                parsed = sch.TagsResponse.model_validate(data)
            except ValidationError as exc:
                raise ModelFailure("Malformed response from /api/tags.") from exc
        except ModelFailure as exc:
            print(f"[ollama] listing models failed: {exc}")
            return ModelResult.failure(str(exc))
        return ModelResult(ok=True, models=tuple(m.name for m in parsed.models))

    def check_connection(self) -> ModelResult:
        try:
            self._request("GET", "/api/tags", timeout=self.health_timeout_s)
        except ModelFailure as exc:
            cfg.debug_log("ollama", f"connection check failed: {exc}")
            return ModelResult.failure(CONNECTION_HINT)
        return ModelResult(ok=True)
