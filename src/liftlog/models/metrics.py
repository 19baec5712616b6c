"""Body metric data models."""

from dataclasses import dataclass, field, replace
from enum import Enum

from .workout import parse_date


class MetricType(str, Enum):
    """Tracked body metric kinds."""

    WEIGHT = "weight"
    BODY_FAT = "bodyFat"
    MUSCLE_MASS = "muscleMass"


METRIC_UNITS = {
    MetricType.WEIGHT: "kg",
    MetricType.BODY_FAT: "%",
    MetricType.MUSCLE_MASS: "%",
}


@dataclass
class MetricEntry:
    """A single dated reading."""

    date: str
    value: float
    id: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"id": self.id, "date": self.date, "value": self.value}

    @classmethod
    def from_dict(cls, data: dict) -> "MetricEntry":
        """Create from dictionary."""
        return cls(id=str(data.get("id", "")), date=data["date"], value=float(data["value"]))


@dataclass
class Goal:
    """Target value for a metric, with an optional deadline."""

    target: float
    deadline: str | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"target": self.target, "deadline": self.deadline}

    @classmethod
    def from_dict(cls, data: dict) -> "Goal":
        """Create from dictionary."""
        return cls(target=float(data["target"]), deadline=data.get("deadline") or None)


@dataclass
class BodyMetricSeries:
    """Date-ordered readings for one metric type."""

    unit: str
    entries: list[MetricEntry] = field(default_factory=list)
    goal: Goal | None = None

    def with_entries(self, entries: list[MetricEntry]) -> "BodyMetricSeries":
        """Return a copy holding ``entries`` sorted ascending by date."""
        ordered = sorted(entries, key=lambda e: parse_date(e.date))
        return replace(self, entries=ordered)

    def with_goal(self, goal: Goal | None) -> "BodyMetricSeries":
        return replace(self, goal=goal)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "unit": self.unit,
            "entries": [e.to_dict() for e in self.entries],
            "goal": self.goal.to_dict() if self.goal else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BodyMetricSeries":
        """Create from dictionary."""
        series = cls(
            unit=data["unit"],
            goal=Goal.from_dict(data["goal"]) if data.get("goal") else None,
        )
        return series.with_entries([MetricEntry.from_dict(e) for e in data.get("entries", [])])


@dataclass
class BodyMetrics:
    """All metric series for one user."""

    weight: BodyMetricSeries = field(
        default_factory=lambda: BodyMetricSeries(unit=METRIC_UNITS[MetricType.WEIGHT])
    )
    body_fat: BodyMetricSeries = field(
        default_factory=lambda: BodyMetricSeries(unit=METRIC_UNITS[MetricType.BODY_FAT])
    )
    muscle_mass: BodyMetricSeries = field(
        default_factory=lambda: BodyMetricSeries(unit=METRIC_UNITS[MetricType.MUSCLE_MASS])
    )

    def get(self, metric_type: MetricType) -> BodyMetricSeries:
        return getattr(self, _FIELD_NAMES[metric_type])

    def with_series(self, metric_type: MetricType, series: BodyMetricSeries) -> "BodyMetrics":
        """Return a copy with one series replaced."""
        return replace(self, **{_FIELD_NAMES[metric_type]: series})

    def to_dict(self) -> dict:
        """Convert to dictionary keyed by metric type value."""
        return {t.value: self.get(t).to_dict() for t in MetricType}

    @classmethod
    def from_dict(cls, data: dict) -> "BodyMetrics":
        """Create from dictionary."""
        metrics = cls()
        for metric_type in MetricType:
            if data.get(metric_type.value):
                metrics = metrics.with_series(
                    metric_type, BodyMetricSeries.from_dict(data[metric_type.value])
                )
        return metrics


_FIELD_NAMES = {
    MetricType.WEIGHT: "weight",
    MetricType.BODY_FAT: "body_fat",
    MetricType.MUSCLE_MASS: "muscle_mass",
}
