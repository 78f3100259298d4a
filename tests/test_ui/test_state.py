from enums import DealerStatus
from schemas import ListQuery
from ui.state import FilterState


def make_state(**kwargs) -> tuple[FilterState, list[ListQuery]]:
    state = FilterState(**kwargs)
    events: list[ListQuery] = []
    state.subscribe(events.append)
    return state, events


def test_status_change_resets_page() -> None:
    state, events = make_state(status_filter=DealerStatus.ACTIVE, page=3)

    assert state.set_status_filter(DealerStatus.PENDING) is True

    assert state.page == 1
    assert len(events) == 1
    assert events[0].status_filter == DealerStatus.PENDING
    assert events[0].page == 1


def test_same_status_is_ignored() -> None:
    state, events = make_state(status_filter=DealerStatus.ACTIVE, page=3)

    assert state.set_status_filter(DealerStatus.ACTIVE) is False

    assert state.page == 3
    assert events == []


def test_search_is_trimmed_and_resets_page() -> None:
    state, events = make_state(page=4)

    state.set_search_text("  acme ")

    assert state.search_text == "acme"
    assert state.page == 1
    assert len(events) == 1


def test_blank_search_clears() -> None:
    state, events = make_state(search_text="acme")

    state.set_search_text("   ")
    state.set_search_text(None)

    assert state.search_text is None
    assert len(events) == 1


def test_page_change_keeps_filters() -> None:
    state, events = make_state(status_filter=DealerStatus.BLOCKED, search_text="x")

    state.set_page(2)

    assert state.query == ListQuery(
        status_filter=DealerStatus.BLOCKED, search_text="x", page=2, page_size=10
    )
    assert len(events) == 1


def test_page_below_one_is_clamped() -> None:
    state, events = make_state(page=2)

    state.set_page(0)

    assert state.page == 1
    assert len(events) == 1


def test_clamp_to_total_pages() -> None:
    state, events = make_state(page=5)

    assert state.clamp(total_pages=2) is True
    assert state.page == 2
    assert state.clamp(total_pages=0) is True
    assert state.page == 1
    assert state.clamp(total_pages=3) is False
    assert len(events) == 2


def test_unsubscribe() -> None:
    state = FilterState()
    events: list[ListQuery] = []
    unsubscribe = state.subscribe(events.append)

    unsubscribe()
    state.set_page(2)

    assert events == []
