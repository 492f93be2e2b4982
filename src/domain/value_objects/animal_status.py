from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

DEFAULT_CULLED_MARKERS = ("Брак", "culled")
DEFAULT_PREGNANT_MARKERS = ("Стельная", "Отёл", "pregnant", "calved")
# Strictly in calf; excludes the calved markers
DEFAULT_GESTATING_MARKERS = ("Стельная", "pregnant")


class StatusCategory(str, Enum):
    CULLED = "culled"
    PREGNANT = "pregnant"
    OPEN = "open"


@dataclass(slots=True, frozen=True)
class StatusMarkers:
    """Substrings that place a free-form status tag into a category."""

    culled: tuple[str, ...] = DEFAULT_CULLED_MARKERS
    pregnant: tuple[str, ...] = DEFAULT_PREGNANT_MARKERS
    gestating: tuple[str, ...] = DEFAULT_GESTATING_MARKERS

    @classmethod
    def from_lists(
        cls,
        culled: Iterable[str],
        pregnant: Iterable[str],
        gestating: Iterable[str] = DEFAULT_GESTATING_MARKERS,
    ) -> StatusMarkers:
        return cls(culled=tuple(culled), pregnant=tuple(pregnant), gestating=tuple(gestating))


def classify_status(status: str | None, markers: StatusMarkers | None = None) -> StatusCategory:
    markers = markers or StatusMarkers()
    text = (status or "").strip()
    if not text:
        return StatusCategory.OPEN
    # Culled takes precedence over pregnant
    if any(m and m in text for m in markers.culled):
        return StatusCategory.CULLED
    if any(m and m in text for m in markers.pregnant):
        return StatusCategory.PREGNANT
    return StatusCategory.OPEN


def is_culled(status: str | None, markers: StatusMarkers | None = None) -> bool:
    return classify_status(status, markers) is StatusCategory.CULLED


def is_pregnant(status: str | None, markers: StatusMarkers | None = None) -> bool:
    return classify_status(status, markers) is StatusCategory.PREGNANT


def is_gestating(status: str | None, markers: StatusMarkers | None = None) -> bool:
    """Currently in calf: a gestating marker matches and the animal is not culled."""
    markers = markers or StatusMarkers()
    text = (status or "").strip()
    if not text or is_culled(text, markers):
        return False
    return any(m and m in text for m in markers.gestating)
