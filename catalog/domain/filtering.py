"""Filter engine: maps (catalog, filter state) to the visible subset.

Everything here is pure. Stages run in a fixed order (text, category,
cost, duration) and are conjunctive, so the order only shows up in the
per-stage diagnostics. The engine filters; it never re-sorts.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from catalog.domain.errors import DataQualityError
from catalog.domain.models import Event, FilterState
from catalog.domain.value_objects import Range, coerce_number

STAGE_TEXT = "text"
STAGE_CATEGORY = "category"
STAGE_COST = "cost"
STAGE_DURATION = "duration"


@dataclass(frozen=True)
class StageTrace:
    """Candidate counts before and after one stage."""

    name: str
    before: int
    after: int


@dataclass(frozen=True)
class FilterResult:
    """Visible events plus diagnostics from a single evaluation."""

    events: tuple[Event, ...]
    rejected: tuple[DataQualityError, ...] = ()
    stages: tuple[StageTrace, ...] = ()

    def __len__(self) -> int:
        return len(self.events)


def _matches_text(event: Event, needle: str) -> bool:
    return (
        needle in event.name.lower()
        or needle in event.description.lower()
        or needle in event.category.lower()
    )


def _range_stage(
    candidates: list[Event],
    field: str,
    bounds: Range,
    rejected: list[DataQualityError],
) -> list[Event]:
    kept = []
    for event in candidates:
        raw = getattr(event, field)
        try:
            value = coerce_number(raw)
        except ValueError:
            rejected.append(DataQualityError(event.id.value, field, raw))
            continue
        if bounds.contains(value):
            kept.append(event)
    return kept


def evaluate(catalog: Sequence[Event], state: FilterState) -> FilterResult:
    """Apply every stage of ``state`` to ``catalog``.

    Events whose cost or duration cannot be read as a number are excluded
    and reported in ``FilterResult.rejected`` rather than treated as zero.
    """
    stages: list[StageTrace] = []
    rejected: list[DataQualityError] = []

    def run(name: str, candidates: list[Event], step: Callable[[list[Event]], list[Event]]) -> list[Event]:
        kept = step(candidates)
        stages.append(StageTrace(name=name, before=len(candidates), after=len(kept)))
        return kept

    candidates = list(catalog)

    needle = state.search_query.lower()
    if state.search_query:
        candidates = run(
            STAGE_TEXT,
            candidates,
            lambda events: [e for e in events if _matches_text(e, needle)],
        )

    if state.selected_categories:
        categories = state.selected_categories
        candidates = run(
            STAGE_CATEGORY,
            candidates,
            lambda events: [e for e in events if e.category in categories],
        )

    candidates = run(
        STAGE_COST,
        candidates,
        lambda events: _range_stage(events, "cost_per_person", state.cost_range, rejected),
    )
    candidates = run(
        STAGE_DURATION,
        candidates,
        lambda events: _range_stage(events, "duration_hours", state.duration_range, rejected),
    )

    return FilterResult(events=tuple(candidates), rejected=tuple(rejected), stages=tuple(stages))


def visible(catalog: Sequence[Event], state: FilterState) -> list[Event]:
    """Return the events of ``catalog`` that satisfy ``state``, in catalog order."""
    return list(evaluate(catalog, state).events)


def category_universe(catalog: Iterable[Event]) -> list[str]:
    """Distinct categories of the unfiltered catalog, in first-seen order."""
    return list(dict.fromkeys(event.category for event in catalog))
