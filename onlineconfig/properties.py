"""Named, typed properties with editor hints."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from onlineconfig.variant import Variant


class EditorType(enum.Enum):
    UNKNOWN = 0
    LINE_EDIT = 1
    PASSWORD_LINE_EDIT = 2
    INTEGER = 3


class AdditionalInformationType(enum.Enum):
    NONE = 0
    INT_LIMITS = 1


@dataclass(frozen=True)
class AdditionalInformation:
    """Extra data an editor needs, tagged by kind."""

    type: AdditionalInformationType


@dataclass(frozen=True)
class IntegerLimits(AdditionalInformation):
    """Inclusive bounds for an integer editor."""

    type: AdditionalInformationType = field(
        default=AdditionalInformationType.INT_LIMITS, init=False
    )
    minimum: int = 0
    maximum: int = 100


@dataclass
class PropertyEditorInfo:
    editor_type: EditorType = EditorType.UNKNOWN
    additional_information: AdditionalInformation | None = None


@dataclass
class Property:
    """A named value; equality considers only the name and the data."""

    name: str
    display_name: str = field(default="", compare=False)
    data: Variant = field(default_factory=Variant)
    editor_info: PropertyEditorInfo = field(
        default_factory=PropertyEditorInfo, compare=False
    )

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("property name must not be empty")
        if not isinstance(self.data, Variant):
            self.data = Variant(self.data)

    def assign(self, data: Any) -> Property:
        """Replace the data, keeping name, display name and editor info."""
        self.data = data if isinstance(data, Variant) else Variant(data)
        return self