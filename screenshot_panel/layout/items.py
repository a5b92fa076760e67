"""Positioned item descriptors produced by a layout pass.

Coordinates are y-up: ``y`` is the bottom edge of the item measured from the
bottom of the scrollable content, so the first entry sits closest to
``content_height``. Interactive items carry identifiers, never references into
the stores; the controller resolves them when a command arrives.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Type, TypeVar

from capture_catalog.colors import RGB
from capture_catalog.models import VariantId

ItemT = TypeVar("ItemT", bound="PanelItem")


@dataclass(frozen=True)
class PanelItem:
    x: float
    y: float
    width: float
    height: float

    kind = "item"


@dataclass(frozen=True)
class HeaderItem(PanelItem):
    text: str = ""

    kind = "header"


@dataclass(frozen=True)
class LabelItem(PanelItem):
    text: str = ""
    color: Optional[RGB] = None
    role: str = "text"

    kind = "label"


@dataclass(frozen=True)
class CheckboxItem(PanelItem):
    region: str = ""
    variant: VariantId = ""
    checked: bool = False
    color: Optional[RGB] = None
    description: str = ""

    kind = "checkbox"


@dataclass(frozen=True)
class DeleteButtonItem(PanelItem):
    region: str = ""
    text: str = "×"

    kind = "delete"


@dataclass(frozen=True)
class DividerItem(PanelItem):
    kind = "divider"


@dataclass(frozen=True)
class PanelLayout:
    items: Tuple[PanelItem, ...]
    content_height: float
    row_advances: Tuple[float, ...] = ()
    top_pad: float = 0.0
    bottom_pad: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.items

    def of_type(self, item_type: Type[ItemT]) -> list[ItemT]:
        return [item for item in self.items if isinstance(item, item_type)]
