"""Test ChatSession request lifecycle"""
import threading

import pytest
from unittest.mock import MagicMock

from chat_controller import ChatSession, MessageKind, PLACEHOLDER_TEXT, SessionState
from ui_context import ContextStore
from ui_errors import ChatRejected
from ui_results import ModelResult


def kinds(session):
    return [m.kind for m in session.transcript]


class TestSubmitRejection:
    @pytest.mark.parametrize("question", ["", "   ", "\n\t", None])
    def test_blank_question_rejected(self, session, client, question):
        with pytest.raises(ChatRejected):
            session.submit(question, client)
        assert session.transcript == []
        assert session.in_flight is False
        client.chat.assert_not_called()

    def test_rejected_while_sending(self, session, client):
        session.begin("first")
        before = list(session.transcript)
        with pytest.raises(ChatRejected):
            session.begin("second")
        assert session.transcript == before
        assert sum(1 for m in session.transcript if m.pending) == 1

    def test_rejected_while_first_prompt_is_being_built(self, session, monkeypatch):
        import chat_controller

        entered = threading.Event()
        release = threading.Event()
        real_assemble = chat_controller.assemble_prompt

        def slow_assemble(items, question):
            if question == "first":
                entered.set()
                release.wait(timeout=5)
            return real_assemble(items, question)

        monkeypatch.setattr(chat_controller, "assemble_prompt", slow_assemble)
        first = threading.Thread(target=session.begin, args=("first",), daemon=True)
        first.start()
        assert entered.wait(timeout=5)
        try:
            with pytest.raises(ChatRejected):
                session.begin("second")
        finally:
            release.set()
            first.join(timeout=5)
        assert [m.content for m in session.transcript if m.kind is MessageKind.USER] == ["first"]
        assert sum(1 for m in session.transcript if m.pending) == 1

    def test_concurrent_begins_admit_one(self, session):
        gate = threading.Barrier(2)
        outcomes = []

        def attempt(question):
            gate.wait(timeout=5)
            try:
                session.begin(question)
                outcomes.append("ok")
            except ChatRejected:
                outcomes.append("rejected")

        threads = [threading.Thread(target=attempt, args=(q,)) for q in ("a", "b")]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)
        assert sorted(outcomes) == ["ok", "rejected"]
        assert sum(1 for m in session.transcript if m.pending) == 1

    def test_prompt_failure_returns_to_idle(self, session, monkeypatch):
        import chat_controller

        def broken(items, question):
            raise ValueError("bad context")

        monkeypatch.setattr(chat_controller, "assemble_prompt", broken)
        with pytest.raises(ValueError):
            session.begin("hi")
        assert session.in_flight is False
        assert session.transcript == []


class TestSubmitLifecycle:
    def test_begin_appends_user_and_placeholder(self, session):
        pending = session.begin("hi")
        assert session.state is SessionState.SENDING
        assert session.in_flight is True
        assert kinds(session) == [MessageKind.USER, MessageKind.ASSISTANT]
        assert session.transcript[-1] is pending.placeholder
        assert pending.placeholder.pending is True
        assert pending.placeholder.content == PLACEHOLDER_TEXT

    def test_success_replaces_placeholder(self, session, client):
        client.chat.return_value = ModelResult(ok=True, content="Hello there")
        result = session.submit("hi", client)
        assert result.ok is True
        assert kinds(session) == [MessageKind.USER, MessageKind.ASSISTANT]
        assert session.transcript[-1].content == "Hello there"
        assert not any(m.pending for m in session.transcript)
        assert session.in_flight is False

    def test_structured_failure_becomes_error_message(self, session, client):
        client.chat.return_value = ModelResult.failure("model not found")
        result = session.submit("hi", client)
        assert result.ok is False
        assert kinds(session) == [MessageKind.USER, MessageKind.ERROR]
        assert session.transcript[-1].content == "Error: model not found"
        assert session.in_flight is False

    def test_client_exception_becomes_error_message(self, session, client):
        client.chat.side_effect = RuntimeError("boom")
        result = session.submit("hi", client)
        assert result.ok is False
        assert kinds(session) == [MessageKind.USER, MessageKind.ERROR]
        assert "boom" in session.transcript[-1].content
        assert not any(m.pending for m in session.transcript)
        assert session.in_flight is False

    def test_exception_without_message_uses_type_name(self, session, client):
        client.chat.side_effect = ValueError()
        session.submit("hi", client)
        assert session.transcript[-1].content == "Error: ValueError"

    def test_malformed_result_is_reported(self, session, client):
        client.chat.return_value = None
        session.submit("hi", client)
        assert session.transcript[-1].kind is MessageKind.ERROR
        assert session.in_flight is False

    def test_can_submit_again_after_failure(self, session, client):
        client.chat.side_effect = [RuntimeError("down"), ModelResult(ok=True, content="back")]
        session.submit("one", client)
        session.submit("two", client)
        assert kinds(session) == [MessageKind.USER, MessageKind.ERROR, MessageKind.USER, MessageKind.ASSISTANT]
        assert session.transcript[-1].content == "back"

    def test_base_exception_still_resets_state(self, session, client):
        client.chat.side_effect = KeyboardInterrupt()
        with pytest.raises(KeyboardInterrupt):
            session.submit("hi", client)
        assert session.in_flight is False
        assert not any(m.pending for m in session.transcript)

    def test_prompt_and_model_sent(self, session, client, make_item):
        session.store.add(make_item("a.txt", "hello"))
        session.select_model("mistral")
        session.submit("Q", client)
        prompt, model = client.chat.call_args.args
        assert "hello" in prompt and prompt.endswith("Question: Q")
        assert model == "mistral"

    def test_double_finish_is_ignored(self, session):
        pending = session.begin("hi")
        session.finish(pending, ModelResult(ok=True, content="a"))
        session.finish(pending, ModelResult(ok=True, content="b"))
        assert [m.content for m in session.transcript] == ["hi", "a"]

    def test_listener_sees_placeholder_while_suspended(self, session, client):
        seen = []
        session.on_change = lambda s: seen.append((s.in_flight, [m.pending for m in s.transcript]))
        session.submit("hi", client)
        assert (True, [False, True]) in seen
        assert seen[-1] == (False, [False, False])

    def test_listener_errors_do_not_break_session(self, session, client):
        session.on_change = MagicMock(side_effect=RuntimeError("render failed"))
        result = session.submit("hi", client)
        assert result.ok is True
        assert session.in_flight is False


class TestBackgroundSubmit:
    def test_runs_on_worker_and_blocks_second_submit(self, session):
        release = threading.Event()
        slow = MagicMock()

        def chat(prompt, model):
            release.wait(timeout=5)
            return ModelResult(ok=True, content="done")

        slow.chat.side_effect = chat
        done = []
        t = session.submit_in_background("hi", slow, on_done=done.append)
        assert session.in_flight is True
        with pytest.raises(ChatRejected):
            session.submit_in_background("again", slow)
        release.set()
        t.join(timeout=5)
        assert done and done[0].ok is True
        assert session.in_flight is False
        assert kinds(session) == [MessageKind.USER, MessageKind.ASSISTANT]


class TestContextAndNotices:
    def test_add_context_reports_loaded(self, session, make_item):
        added = session.add_context([make_item("a.txt"), make_item("b.txt")])
        assert added == 2
        assert session.transcript[-1].kind is MessageKind.SYSTEM
        assert session.transcript[-1].content == "Loaded 2 files successfully."

    def test_add_context_with_skipped_files(self, session, make_item):
        session.add_context([make_item("a.txt")], skipped=1)
        assert [m.content for m in session.transcript] == [
            "Loaded 1 files successfully.",
            "Skipped 1 file(s) that could not be read.",
        ]

    def test_add_context_reports_files_without_text(self, session):
        session.add_context([], empty=2)
        assert [(m.kind, m.content) for m in session.transcript] == [
            (MessageKind.SYSTEM, "No text found in 2 file(s)."),
        ]

    def test_add_context_mixed_batch(self, session, make_item):
        session.add_context([make_item("a.txt")], skipped=1, empty=1)
        assert [m.content for m in session.transcript] == [
            "Loaded 1 files successfully.",
            "Skipped 1 file(s) that could not be read.",
            "No text found in 1 file(s).",
        ]

    def test_add_nothing_is_silent(self, session):
        session.add_context([])
        assert session.transcript == []

    def test_clear_context(self, session, make_item):
        session.store.add(make_item("a.txt"))
        session.clear_context()
        assert session.store.count == 0
        assert session.transcript[-1].content == "Context cleared."


class TestModels:
    def test_refresh_selects_first_when_default_missing(self, client):
        client.list_models.return_value = ModelResult(ok=True, models=("qwen2", "mistral"))
        s = ChatSession(ContextStore(), default_model="llama3.1")
        status = s.refresh_models(client)
        assert s.available_models == ["qwen2", "mistral"]
        assert s.selected_model == "qwen2"
        assert "2 model(s)" in status

    def test_refresh_keeps_current_selection(self, session, client):
        session.refresh_models(client)
        assert session.selected_model == "llama3.1"

    def test_refresh_failure_keeps_fallback(self, session, client):
        client.list_models.return_value = ModelResult.failure("connection refused")
        status = session.refresh_models(client)
        assert session.selected_model == "llama3.1"
        assert session.available_models == []
        assert session.transcript == []
        assert "connection refused" in status

    def test_refresh_client_raising(self, session, client):
        client.list_models.side_effect = RuntimeError("kaput")
        status = session.refresh_models(client)
        assert "kaput" in status
        assert session.transcript == []

    def test_refresh_empty_list_uses_default(self, session, client):
        session.select_model("mistral")
        client.list_models.return_value = ModelResult(ok=True, models=())
        session.refresh_models(client)
        assert session.selected_model == "llama3.1"

    def test_select_blank_model_falls_back(self, session):
        session.select_model("  ")
        assert session.selected_model == "llama3.1"

    def test_check_connection(self, session, client):
        assert session.check_connection(client) == (True, "Connected to Ollama")
        client.check_connection.return_value = ModelResult.failure("Cannot connect")
        assert session.check_connection(client) == (False, "Cannot connect")
        assert session.transcript == []


def test_end_to_end_geography(make_item):
    store = ContextStore()
    item = make_item("geo.txt", "Paris is the capital of France.", path="/docs/geo.txt")
    store.add(item)
    session = ChatSession(store, default_model="llama3.1")
    client = MagicMock()
    client.chat.return_value = ModelResult(ok=True, content="Paris.")

    result = session.submit("What is the capital of France?", client)

    assert result.ok is True
    assert [(m.kind.value, m.content) for m in session.transcript] == [
        ("user", "What is the capital of France?"),
        ("assistant", "Paris."),
    ]
    assert session.in_flight is False
    assert store.items == (item,)
    prompt = client.chat.call_args.args[0]
    assert "Paris is the capital of France." in prompt
    assert "geo.txt" in prompt


def test_controller_does_not_depend_on_http_client():
    import inspect

    import chat_controller
    import ui_model_client
    import ui_results

    assert chat_controller.ModelResult is ui_results.ModelResult
    assert ui_model_client.ModelResult is ui_results.ModelResult
    assert "ui_model_client" not in inspect.getsource(chat_controller)
