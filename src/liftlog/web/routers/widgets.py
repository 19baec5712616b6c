"""Dashboard widget routes."""

from fastapi import APIRouter, Depends, Form
from pydantic import BaseModel

from ...models.widgets import WidgetConfig, WidgetType
from ...services.tracker import Tracker
from ..deps import get_tracker, outcome_response

router = APIRouter(prefix="/widgets", tags=["widgets"])


class WidgetIn(BaseModel):
    """Widget layout entry sent by the dashboard customizer."""

    id: str
    type: WidgetType
    position: int
    visible: bool = True


def _widgets(tracker: Tracker) -> list[dict]:
    return [w.to_dict() for w in tracker.metrics.widgets]


@router.get("")
async def list_widgets(visible_only: bool = False, tracker: Tracker = Depends(get_tracker)):
    widgets = tracker.metrics.visible_widgets() if visible_only else tracker.metrics.widgets
    return {"widgets": [w.to_dict() for w in widgets]}


@router.put("")
async def save_widgets(widgets: list[WidgetIn], tracker: Tracker = Depends(get_tracker)):
    """Replace the whole layout."""
    configs = [
        WidgetConfig(id=w.id, type=w.type, position=w.position, visible=w.visible) for w in widgets
    ]
    outcome = await tracker.metrics.update_widgets(configs)
    return outcome_response(outcome, "widgets", _widgets(tracker))


@router.post("/swap")
async def swap_widgets(
    source_id: str = Form(...), target_id: str = Form(...), tracker: Tracker = Depends(get_tracker)
):
    """Swap the positions of two widgets (drag and drop)."""
    outcome = await tracker.metrics.swap_widget_positions(source_id, target_id)
    return outcome_response(outcome, "widgets", _widgets(tracker))


@router.post("/reset")
async def reset_widgets(tracker: Tracker = Depends(get_tracker)):
    outcome = await tracker.metrics.reset_widgets()
    return outcome_response(outcome, "widgets", _widgets(tracker))


@router.post("/{widget_id}/toggle")
async def toggle_widget(widget_id: str, tracker: Tracker = Depends(get_tracker)):
    outcome = await tracker.metrics.toggle_widget_visibility(widget_id)
    return outcome_response(outcome, "widgets", _widgets(tracker))
