"""Unit tests for tab identity log correlation."""

from logflow.application.observability.tab_context import (
    generate_tab_id,
    get_tab_id,
    set_tab_id,
    tab_id_processor,
    tab_scope,
)


class TestTabContext:
    """Tests for the tab id context variable."""

    def test_generate_tab_id(self) -> None:
        tab_id = generate_tab_id()
        assert len(tab_id) == 8
        assert tab_id != generate_tab_id()

    def test_scope_restores_previous(self) -> None:
        with tab_scope("outer"):
            with tab_scope("inner"):
                assert get_tab_id() == "inner"
            assert get_tab_id() == "outer"

    def test_processor_adds_tab_id(self) -> None:
        with tab_scope("tab-b"):
            event = tab_id_processor(None, "info", {"event": "x"})
        assert event["tab_id"] == "tab-b"

    def test_processor_keeps_explicit_tab_id(self) -> None:
        with tab_scope("tab-b"):
            event = tab_id_processor(None, "info", {"event": "x", "tab_id": "mine"})
        assert event["tab_id"] == "mine"

    def test_processor_without_tab(self) -> None:
        with tab_scope(""):
            assert "tab_id" not in tab_id_processor(None, "info", {"event": "x"})

    def test_set_tab_id(self) -> None:
        with tab_scope(""):
            set_tab_id("tab-c")
            assert get_tab_id() == "tab-c"
