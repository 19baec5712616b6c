"""Dashboard widget configuration models."""

from dataclasses import dataclass, replace
from enum import Enum


class WidgetType(str, Enum):
    """Summary cards that can be shown on the dashboard."""

    TOTAL_WORKOUTS = "totalWorkouts"
    TOTAL_EXERCISES = "totalExercises"
    TOTAL_SETS = "totalSets"
    MOST_FREQUENT_EXERCISE = "mostFrequentExercise"
    CURRENT_WEIGHT = "currentWeight"
    WEIGHT_GOAL = "weightGoal"
    BODY_FAT = "bodyFat"
    MUSCLE_MASS = "muscleMass"


WIDGET_TITLES = {
    WidgetType.TOTAL_WORKOUTS: "Total Workouts",
    WidgetType.TOTAL_EXERCISES: "Total Exercises",
    WidgetType.TOTAL_SETS: "Total Sets",
    WidgetType.MOST_FREQUENT_EXERCISE: "Most Frequent Exercise",
    WidgetType.CURRENT_WEIGHT: "Current Weight",
    WidgetType.WEIGHT_GOAL: "Weight Goal",
    WidgetType.BODY_FAT: "Body Fat",
    WidgetType.MUSCLE_MASS: "Muscle Mass",
}


@dataclass
class WidgetConfig:
    """Position and visibility of one dashboard widget."""

    id: str
    type: WidgetType
    position: int
    visible: bool = True

    @property
    def title(self) -> str:
        return WIDGET_TITLES.get(self.type, self.type.value)

    def moved_to(self, position: int) -> "WidgetConfig":
        return replace(self, position=position)

    def toggled(self) -> "WidgetConfig":
        return replace(self, visible=not self.visible)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "type": self.type.value,
            "position": self.position,
            "visible": self.visible,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WidgetConfig":
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            type=WidgetType(data["type"]),
            position=int(data["position"]),
            visible=bool(data.get("visible", True)),
        )


def default_widgets() -> list[WidgetConfig]:
    """Widget layout for users who have not customized their dashboard."""
    return [
        WidgetConfig(id="1", type=WidgetType.TOTAL_WORKOUTS, position=0),
        WidgetConfig(id="2", type=WidgetType.TOTAL_EXERCISES, position=1),
        WidgetConfig(id="3", type=WidgetType.TOTAL_SETS, position=2),
        WidgetConfig(id="4", type=WidgetType.MOST_FREQUENT_EXERCISE, position=3),
    ]
