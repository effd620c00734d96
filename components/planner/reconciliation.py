"""Merging item templates with a month's saved entries."""

from typing import Iterable, List, Optional, Sequence, Tuple

from components.planner.models import PlannerEntry
from components.planner.schemas import EntryCreate, PlannerItem, PlannerMode, PlannerRow, PlannerState
from components.template.models import ItemTemplate
from components.template.schemas import is_inflow


def resolve_mode(has_entries: bool, editing: bool) -> PlannerMode:
    """Pick the planner mode from whether the month is saved and whether the user is editing."""
    if not has_entries:
        return PlannerMode.CREATE
    if editing:
        return PlannerMode.EDIT
    return PlannerMode.VIEW


def compute_totals(items: Iterable[PlannerItem]) -> Tuple[int, int, int]:
    """Return (inflow, outflow, net) for the given rows."""
    inflow = 0
    outflow = 0
    for item in items:
        if is_inflow(item.category):
            inflow += item.amount
        else:
            outflow += item.amount
    return inflow, outflow, inflow - outflow


def _find_entry(entries: Sequence[PlannerEntry], template_id: int) -> Optional[PlannerEntry]:
    # First match wins if a slot was ever duplicated
    return next((entry for entry in entries if entry.template_id == template_id), None)


def _item(template: ItemTemplate, entry: Optional[PlannerEntry]) -> PlannerItem:
    return PlannerItem(
        entry_id=entry.id if entry is not None else 0,
        template_id=template.id,
        name=template.name,
        category=template.category,
        amount=entry.amount if entry is not None else 0,
        is_done=entry.is_done if entry is not None else False,
    )


def reconcile(
    templates: Sequence[ItemTemplate],
    entries: Sequence[PlannerEntry],
    mode: PlannerMode,
) -> PlannerState:
    """
    Build the displayable rows for a month.

    In create and edit mode every template gets exactly one row, pre-filled
    from its saved entry when there is one. In view mode only templates that
    have a saved entry are shown. With no templates at all the state reports
    loading instead of empty totals.
    """
    if not templates:
        return PlannerState(is_loading=True, mode=mode)

    items = []
    for template in templates:
        entry = _find_entry(entries, template.id)
        if entry is None and mode == PlannerMode.VIEW:
            continue
        items.append(_item(template, entry))

    inflow, outflow, net = compute_totals(items)
    return PlannerState(
        mode=mode,
        is_loading=False,
        items=items,
        total_inflows=inflow,
        total_outflows=outflow,
        net_balance=net,
    )


def entries_to_save(month: str, rows: Iterable[PlannerRow]) -> List[EntryCreate]:
    """Keep the rows with a positive amount and turn them into new entries for month."""
    return [
        EntryCreate(
            planner_month=month,
            template_id=row.template_id,
            amount=row.amount,
            is_done=row.is_done,
        )
        for row in rows
        if row.amount > 0
    ]
