from __future__ import annotations

from dataclasses import dataclass, field

from .models import Restaurant, SearchState, SortBy, SortOrder

PROMPT_MESSAGE = "Enter your location to find nearby restaurants"
PROMPT_HINT = 'Try searching for "San Francisco" or "94102"'
LOADING_MESSAGE = "Finding restaurants..."
EMPTY_MESSAGE = "No restaurants found. Try a different location."

SORT_FIELD_LABELS: dict[SortBy, str] = {
    SortBy.distance: "Distance",
    SortBy.rating: "Rating",
    SortBy.price: "Price",
    SortBy.name: "Name",
}

SORT_ORDER_LABELS: dict[SortOrder, str] = {
    SortOrder.asc: "Ascending",
    SortOrder.desc: "Descending",
}

SORT_ORDER_ARROWS: dict[SortOrder, str] = {
    SortOrder.asc: "↑",
    SortOrder.desc: "↓",
}


@dataclass(frozen=True)
class SortControls:
    sort_by: SortBy
    sort_order: SortOrder
    options: list[tuple[SortBy, str]] = field(
        default_factory=lambda: list(SORT_FIELD_LABELS.items())
    )

    @property
    def order_label(self) -> str:
        return SORT_ORDER_LABELS[self.sort_order]

    @property
    def order_arrow(self) -> str:
        return SORT_ORDER_ARROWS[self.sort_order]

    @property
    def order_title(self) -> str:
        return f"Sort {self.order_label.lower()}"


@dataclass(frozen=True)
class SearchView:
    """What the results area should display for one state snapshot.

    Each section is ``None`` (or empty) when it should be hidden.
    """

    prompt: str | None = None
    prompt_hint: str | None = None
    loading_message: str | None = None
    error_message: str | None = None
    empty_message: str | None = None
    heading: str | None = None
    restaurants: tuple[Restaurant, ...] = ()
    sort_controls: SortControls | None = None


def build_view(state: SearchState) -> SearchView:
    show_results = not state.is_loading and len(state.results) > 0
    show_empty = (
        not state.is_loading
        and state.has_searched
        and not state.results
        and state.error is None
    )

    return SearchView(
        prompt=None if state.has_searched else PROMPT_MESSAGE,
        prompt_hint=None if state.has_searched else PROMPT_HINT,
        loading_message=LOADING_MESSAGE if state.is_loading else None,
        error_message=state.error,
        empty_message=EMPTY_MESSAGE if show_empty else None,
        heading=f"Found {len(state.results)} restaurants near you" if show_results else None,
        # Backend order is authoritative; never re-sort here.
        restaurants=state.results if show_results else (),
        sort_controls=SortControls(state.sort_by, state.sort_order) if show_results else None,
    )
