"""Bottom-up reflow layout for the pending and queue panels.

Both panels are laid out in two passes over the same inputs: a measure pass
that sums row heights into the scrollable content height, and a placement
pass that walks a cursor down from the top padding and records every row
advance. The passes share metrics, available widths and entry order, so the
placement cursor always lands exactly on the bottom padding.
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import AbstractSet, Callable, Iterable, Mapping, Optional, Protocol, Sequence, Tuple

from capture_catalog.colors import RGB, display_color, enabled_color
from capture_catalog.models import VariantId
from screenshot_panel.layout.items import (
    CheckboxItem,
    DeleteButtonItem,
    DividerItem,
    HeaderItem,
    LabelItem,
    PanelItem,
    PanelLayout,
)

MeasureFn = Callable[[str], float]

CURRENT_HEADER = "Current:"
QUEUED_HEADER = "Queued:"


class VariantStyle(Protocol):
    def display_label(self, variant: VariantId) -> str: ...

    def base_color(self, variant: VariantId) -> RGB: ...


class QueuedEntryLike(Protocol):
    name: str
    variants: AbstractSet[VariantId]


@dataclass(frozen=True)
class LayoutMetrics:
    scrollbar_width: float = 20.0
    checkbox_size: float = 24.0
    line_height: float = 20.0
    big_line_height: float = 30.0
    big_pad: float = 12.0
    small_pad: float = 6.0
    sep_pad: float = 18.0
    edge_pad: float = 6.0
    divider_thickness: float = 2.0
    min_content_height: float = 0.0

    @property
    def checkbox_line_height(self) -> float:
        return self.checkbox_size + self.small_pad

    @property
    def queue_variant_inset(self) -> float:
        return self.edge_pad + self.sep_pad

    def pending_available_width(self, panel_width: float) -> float:
        return panel_width - self.scrollbar_width - 2 * self.edge_pad

    def queue_available_width(self, panel_width: float) -> float:
        return panel_width - self.scrollbar_width - self.queue_variant_inset - 2 * self.edge_pad

    def with_overrides(self, overrides: Mapping[str, float]) -> "LayoutMetrics":
        known = {f.name for f in fields(self)}
        valid = {key: float(value) for key, value in overrides.items() if key in known}
        return replace(self, **valid) if valid else self


DEFAULT_METRICS = LayoutMetrics()


@dataclass(frozen=True)
class WrapResult:
    positions: Tuple[Tuple[float, int], ...]
    line_count: int


def wrap_tokens(widths: Iterable[float], available_width: float, padding: float) -> WrapResult:
    """Pack tokens left to right, starting a new line when one would overflow.

    Each position is ``(x, line_index)``. A token that does not fit, even at
    x = 0, moves to a fresh line first, so an overwide leading token leaves
    line 0 empty.
    """

    x = 0.0
    line = 0
    positions: list[Tuple[float, int]] = []
    for width in widths:
        if x + width > available_width:
            x = 0.0
            line += 1
        positions.append((x, line))
        x += width + padding
    return WrapResult(positions=tuple(positions), line_count=line + 1)


def ordered_variants(variants: AbstractSet[VariantId], variant_order: Sequence[VariantId]) -> list[VariantId]:
    """Catalog order first; variants unknown to the catalog trail sorted by id."""

    order = set(variant_order)
    known = [variant for variant in variant_order if variant in variants]
    extra = sorted(variant for variant in variants if variant not in order)
    return known + extra


class _Cursor:
    def __init__(self, top: float) -> None:
        self.y = top
        self.advances: list[float] = []

    def advance(self, amount: float) -> float:
        self.y -= amount
        self.advances.append(amount)
        return self.y


# Pending panel ----------------------------------------------------------


def measure_pending_height(
    entry_count: int,
    wrap: WrapResult,
    metrics: LayoutMetrics = DEFAULT_METRICS,
) -> float:
    if entry_count <= 0:
        return metrics.min_content_height
    per_entry = metrics.line_height + metrics.sep_pad + metrics.checkbox_line_height * wrap.line_count
    return 2 * metrics.big_pad + per_entry * entry_count


def layout_pending(
    entries: Sequence[Tuple[str, AbstractSet[VariantId]]],
    variants: Sequence[VariantId],
    style: VariantStyle,
    panel_width: float,
    measure: MeasureFn,
    metrics: LayoutMetrics = DEFAULT_METRICS,
) -> PanelLayout:
    """Lay out staged regions: a delete/name row, then wrapped variant checkboxes."""

    if not entries:
        return PanelLayout(items=(), content_height=metrics.min_content_height)

    labels = [style.display_label(variant) for variant in variants]
    label_widths = [float(measure(label)) for label in labels]
    token_widths = [metrics.checkbox_size + metrics.big_pad + width for width in label_widths]
    wrap = wrap_tokens(token_widths, metrics.pending_available_width(panel_width), metrics.big_pad)
    content_height = measure_pending_height(len(entries), wrap, metrics)

    items: list[PanelItem] = []
    cursor = _Cursor(content_height - metrics.big_pad)
    edge = metrics.edge_pad
    line_h = metrics.line_height
    for region, selected in entries:
        row_y = cursor.advance(line_h + metrics.sep_pad)
        items.append(DeleteButtonItem(x=edge, y=row_y, width=line_h, height=line_h, region=region))
        items.append(
            LabelItem(
                x=edge + line_h + metrics.small_pad,
                y=row_y,
                width=float(measure(region)),
                height=line_h,
                text=region,
                role="region",
            )
        )

        first_row_y = cursor.advance(metrics.checkbox_line_height)
        for variant, label, label_width, (token_x, line_index) in zip(variants, labels, label_widths, wrap.positions):
            checked = variant in selected
            color = display_color(style.base_color(variant), checked)
            token_y = first_row_y - line_index * metrics.checkbox_line_height
            items.append(
                CheckboxItem(
                    x=edge + token_x,
                    y=token_y,
                    width=metrics.checkbox_size,
                    height=metrics.checkbox_size,
                    region=region,
                    variant=variant,
                    checked=checked,
                    color=color,
                    description=label,
                )
            )
            items.append(
                LabelItem(
                    x=edge + token_x + metrics.checkbox_size + metrics.big_pad,
                    y=token_y,
                    width=label_width,
                    height=line_h,
                    text=label,
                    color=color,
                    role="variant",
                )
            )
        for _ in range(wrap.line_count - 1):
            cursor.advance(metrics.checkbox_line_height)

    return PanelLayout(
        items=tuple(items),
        content_height=content_height,
        row_advances=tuple(cursor.advances),
        top_pad=metrics.big_pad,
        bottom_pad=metrics.big_pad,
    )


# Queue panel ------------------------------------------------------------


def measure_queue_height(
    line_counts: Sequence[int],
    metrics: LayoutMetrics = DEFAULT_METRICS,
) -> float:
    if not line_counts:
        return metrics.min_content_height
    height = 2 * metrics.big_pad + metrics.big_line_height
    for lines in line_counts:
        height += metrics.line_height + metrics.line_height * lines
    height += metrics.big_pad * (len(line_counts) - 1)
    if len(line_counts) > 1:
        height += 2 * metrics.small_pad + metrics.divider_thickness + metrics.big_line_height
    return height


def layout_queue(
    entries: Sequence[QueuedEntryLike],
    variant_order: Sequence[VariantId],
    style: VariantStyle,
    panel_width: float,
    measure: MeasureFn,
    metrics: LayoutMetrics = DEFAULT_METRICS,
) -> PanelLayout:
    """Lay out the queue: "Current:" head entry, divider, then "Queued:" entries."""

    if not entries:
        return PanelLayout(items=(), content_height=metrics.min_content_height)

    available = metrics.queue_available_width(panel_width)
    blocks: list[Tuple[str, list[VariantId], list[str], list[float], WrapResult]] = []
    for entry in entries:
        variants = ordered_variants(entry.variants, variant_order)
        labels = [style.display_label(variant) for variant in variants]
        widths = [float(measure(label)) for label in labels]
        blocks.append((entry.name, variants, labels, widths, wrap_tokens(widths, available, metrics.big_pad)))
    content_height = measure_queue_height([block[4].line_count for block in blocks], metrics)

    items: list[PanelItem] = []
    cursor = _Cursor(content_height - metrics.big_pad)
    edge = metrics.edge_pad
    line_h = metrics.line_height

    header_y = cursor.advance(metrics.big_line_height)
    items.append(
        HeaderItem(x=edge, y=header_y, width=float(measure(CURRENT_HEADER)), height=metrics.big_line_height, text=CURRENT_HEADER)
    )
    for index, (name, variants, labels, widths, wrap) in enumerate(blocks, start=1):
        if index > 1:
            cursor.advance(metrics.big_pad)
        title = f"{index}. {name}"
        title_y = cursor.advance(line_h)
        items.append(
            LabelItem(
                x=edge + metrics.small_pad,
                y=title_y,
                width=float(measure(title)),
                height=line_h,
                text=title,
                role="entry",
            )
        )
        first_row_y = cursor.advance(line_h)
        for variant, label, width, (token_x, line_index) in zip(variants, labels, widths, wrap.positions):
            items.append(
                LabelItem(
                    x=metrics.queue_variant_inset + token_x,
                    y=first_row_y - line_index * line_h,
                    width=width,
                    height=line_h,
                    text=label,
                    color=enabled_color(style.base_color(variant)),
                    role="variant",
                )
            )
        for _ in range(wrap.line_count - 1):
            cursor.advance(line_h)

        if index == 1 and len(blocks) > 1:
            divider_y = cursor.advance(metrics.small_pad + metrics.divider_thickness)
            items.append(
                DividerItem(
                    x=edge,
                    y=divider_y,
                    width=panel_width - metrics.scrollbar_width - 2 * edge,
                    height=metrics.divider_thickness,
                )
            )
            queued_y = cursor.advance(metrics.small_pad + metrics.big_line_height)
            items.append(
                HeaderItem(x=edge, y=queued_y, width=float(measure(QUEUED_HEADER)), height=metrics.big_line_height, text=QUEUED_HEADER)
            )

    return PanelLayout(
        items=tuple(items),
        content_height=content_height,
        row_advances=tuple(cursor.advances),
        top_pad=metrics.big_pad,
        bottom_pad=metrics.big_pad,
    )


def parse_metric_overrides(raw: Optional[Mapping[str, object]]) -> dict[str, float]:
    """Keep only known, positive numeric LayoutMetrics overrides."""

    if not isinstance(raw, Mapping):
        return {}
    known = {f.name for f in fields(LayoutMetrics)}
    overrides: dict[str, float] = {}
    for key, value in raw.items():
        if key not in known or isinstance(value, bool):
            continue
        try:
            numeric = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            continue
        if numeric < 0.0 or numeric != numeric:
            continue
        overrides[key] = numeric
    return overrides
