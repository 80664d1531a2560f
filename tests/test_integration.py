"""End-to-end: a document editor whose save round-trip is folded into history."""

from __future__ import annotations

import logging

from retrohistory import (
    INIT,
    Action,
    Begin,
    End,
    HistoryAmender,
    Store,
    merge_keys,
    with_history,
)
from retrohistory.core.types import action_type


def editor_reducer(document, action):
    if document is None:
        return {"text": "", "status": "draft", "revision": 0}
    kind = action_type(action)
    if kind == "TYPE":
        return {**document, "text": document["text"] + action.payload["text"]}
    if kind == "PUBLISH_REQUEST":
        return {**document, "status": "publishing"}
    if kind == "PUBLISH_SUCCESS":
        return {**document, "status": "published", "revision": action.payload["revision"]}
    if kind == "LOAD":
        return {**document, **action.payload}
    return document


def build_store() -> Store:
    reducer = HistoryAmender(
        with_history(editor_reducer, reset_types=["LOAD"]),
        merge=merge_keys("status", "revision"),
    )
    return Store(reducer)


class TestPublishRoundTrip:
    def setup_method(self):
        self.store = build_store()
        self.store.dispatch(Action("TYPE", {"text": "Hello"}))
        self.store.begin("publish-1", "PUBLISH_REQUEST")
        self.store.dispatch(Action("TYPE", {"text": ", world"}))
        self.store.end("publish-1", "PUBLISH_SUCCESS", revision=7)

    def test_success_does_not_add_undo_step(self):
        state = self.store.get_state()
        # "" -> "Hello" -> publish request -> ", world"; success is folded in
        assert len(state.past) == 3
        assert state.present == {"text": "Hello, world", "status": "published", "revision": 7}

    def test_entries_since_request_carry_published_status(self):
        past = self.store.get_state().past
        assert past[0]["status"] == "draft"
        assert past[1]["status"] == "draft"
        assert past[2] == {"text": "Hello", "status": "published", "revision": 7}

    def test_undo_keeps_published_status(self):
        state = self.store.undo()
        assert state.present == {"text": "Hello", "status": "published", "revision": 7}
        state = self.store.undo()
        assert state.present == {"text": "Hello", "status": "draft", "revision": 0}

    def test_redo_after_undo_returns_to_present(self):
        self.store.undo()
        state = self.store.redo()
        assert state.present["text"] == "Hello, world"
        assert state.present["status"] == "published"


class TestConcurrentOperations:
    def test_two_operations_close_in_reverse_order(self):
        store = build_store()
        store.begin("a", "TYPE", text="a")
        store.begin("b", "TYPE", text="b")
        store.dispatch(Action("TYPE", {"text": "c"}))
        store.end("b", "PUBLISH_SUCCESS", revision=1)
        state = store.get_state()
        assert set(state.pending) == {"a"}
        assert [entry["revision"] for entry in state.past] == [0, 0, 1]

    def test_mapping_actions_round_trip(self):
        reducer = HistoryAmender(
            with_history(lambda doc, action: doc if doc is not None else {"n": 0}),
        )
        state = reducer(None, INIT)
        state = reducer(state, {"type": "MARK", "amend": {"kind": "BEGIN", "id": "m"}})
        assert state.pending == {"m": {"n": 0}}


class TestDiagnostics:
    def test_stale_operation_after_load_is_reported(self, caplog):
        store = build_store()
        store.begin("publish", "PUBLISH_REQUEST")
        store.dispatch(Action("LOAD"))
        with caplog.at_level(logging.WARNING, logger="retrohistory.amender.amender"):
            state = store.end("publish", "PUBLISH_SUCCESS", revision=2)
        assert "history could not be amended: invalid operation id 'publish'" in caplog.text
        assert state.present["status"] == "published"
        assert len(state.past) == 1

    def test_directives_accept_prebuilt_variants(self):
        store = build_store()
        store.dispatch(Action("PUBLISH_REQUEST", amend=Begin(1)))
        state = store.dispatch(Action("PUBLISH_SUCCESS", {"revision": 3}, amend=End(1)))
        assert state.past == ({"text": "", "status": "draft", "revision": 0},)
        assert state.present["revision"] == 3
        assert state.pending == {}
