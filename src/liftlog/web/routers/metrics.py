"""Body metric and goal routes."""

from datetime import date as date_type

from fastapi import APIRouter, Depends, Form

from ...models.metrics import MetricType
from ...services.tracker import Tracker
from ..deps import get_tracker, outcome_response

router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.get("")
async def list_metrics(tracker: Tracker = Depends(get_tracker)):
    """All readings and goals, keyed by metric type."""
    return {"metrics": tracker.metrics.metrics.to_dict()}


@router.get("/{metric_type}/progress")
async def goal_progress(metric_type: MetricType, tracker: Tracker = Depends(get_tracker)):
    """Latest reading and goal progress for one metric."""
    return {
        "type": metric_type.value,
        "latest": tracker.metrics.latest_value(metric_type),
        "goal_progress": tracker.metrics.goal_progress(metric_type),
        "kg": (
            None
            if metric_type is MetricType.WEIGHT
            else tracker.metrics.body_composition_kg(metric_type)
        ),
    }


@router.post("/{metric_type}")
async def add_metric(
    metric_type: MetricType,
    value: float = Form(...),
    date: str = Form(None),
    tracker: Tracker = Depends(get_tracker),
):
    outcome = await tracker.metrics.add_metric(
        metric_type, value, date or date_type.today().isoformat()
    )
    return outcome_response(outcome, "metrics", tracker.metrics.metrics.to_dict())


@router.delete("/{metric_type}/{entry_id}")
async def delete_metric(
    metric_type: MetricType, entry_id: str, tracker: Tracker = Depends(get_tracker)
):
    outcome = await tracker.metrics.delete_metric(metric_type, entry_id)
    return outcome_response(outcome, "metrics", tracker.metrics.metrics.to_dict())


@router.put("/{metric_type}/goal")
async def set_goal(
    metric_type: MetricType,
    target: float = Form(...),
    deadline: str | None = Form(None),
    tracker: Tracker = Depends(get_tracker),
):
    outcome = await tracker.metrics.set_goal(metric_type, target, deadline)
    return outcome_response(outcome, "metrics", tracker.metrics.metrics.to_dict())
