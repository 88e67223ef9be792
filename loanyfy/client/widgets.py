"""Headless widget and display-surface abstractions for the calculator"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol


@dataclass
class Widget:
    """Input widget holding a value (slider position or numeric field text)"""

    name: str
    value: Any = None


@dataclass
class InputPair:
    """Slider and numeric field bound to the same calculator input"""

    slider: Widget
    field: Widget

    @classmethod
    def named(cls, name: str) -> "InputPair":
        return cls(slider=Widget(f"{name}Range"), field=Widget(f"{name}Input"))

    def write(self, slider_value: Any, field_value: Any = None) -> None:
        self.slider.value = slider_value
        self.field.value = slider_value if field_value is None else field_value


@dataclass
class DisplaySurface:
    """Text element showing a formatted value"""

    name: str
    text: str = ""
    value: float = 0.0  # Last value written to text


class Transition(Protocol):
    """Running display transition; cancel() stops it where it is"""

    @property
    def active(self) -> bool: ...

    def cancel(self) -> None: ...


class Animator(Protocol):
    """Drives a surface from start to end by calling render with intermediate values"""

    def animate(self, start: float, end: float, render: Callable[[float], None]) -> Transition: ...


class CompletedTransition:
    active = False

    def cancel(self) -> None:
        pass


class InstantAnimator:
    """Animator that renders the end value immediately"""

    def animate(self, start: float, end: float, render: Callable[[float], None]) -> Transition:
        render(end)
        return CompletedTransition()


def is_running(transition: Optional[Transition]) -> bool:
    return transition is not None and transition.active
