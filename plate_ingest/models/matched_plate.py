from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .model_file import ModelFileDescriptor
from .plate_record import PlateRecord

__all__ = [
    "Health",
    "Occupancy",
    "MatchedPlate",
]


class Health(Enum):
    NEW = "new"
    USED = "used"
    LOCKED = "locked"


class Occupancy(Enum):
    FREE = "free"
    IN_USE = "in-use"


@dataclass(frozen=True)
class MatchedPlate:
    """A PlateRecord plus the outcome of exact-name folder matching.

    ``model_files`` lists every model descriptor of the matched folder, the
    first one being ``linked_model``. ``model_status`` explains a missing link.
    """
    record: PlateRecord
    linked_model: ModelFileDescriptor | None = None
    model_files: tuple[ModelFileDescriptor, ...] = ()
    folder_image: ModelFileDescriptor | None = None
    model_status: str | None = None

    @property
    def plate_number(self) -> str:
        return self.record.plate_number

    @property
    def is_linked(self) -> bool:
        return self.linked_model is not None

    @property
    def health(self) -> Health:
        if self.record.is_locked:
            return Health.LOCKED
        if self.record.work_history_entries:
            return Health.USED
        return Health.NEW
