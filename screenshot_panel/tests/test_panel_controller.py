import pytest

from screenshot_panel.controller.panel_controller import (
    PanelController,
    RemoveRegionCommand,
    ToggleVariantCommand,
)
from screenshot_panel.layout import CheckboxItem, PanelLayout
from screenshot_panel.services.queue_model import ScreenshotQueueModel


class RecordingSink:
    def __init__(self) -> None:
        self.layouts: list[PanelLayout] = []

    def show(self, layout: PanelLayout) -> None:
        self.layouts.append(layout)


def _controller(catalog, measure):
    model = ScreenshotQueueModel(catalog, measure)
    pending = RecordingSink()
    queue = RecordingSink()
    controller = PanelController(model, pending_sink=pending, queue_sink=queue)
    return controller, pending, queue


def test_first_tick_paints_both_panels_once(catalog, measure):
    controller, pending, queue = _controller(catalog, measure)

    assert controller.tick(300, 300) == (True, True)
    assert controller.tick(300, 300) == (False, False)
    assert len(pending.layouts) == 1 and pending.layouts[0].is_empty
    assert len(queue.layouts) == 1


def test_multiple_mutations_rebuild_once_per_tick(catalog, measure):
    controller, pending, queue = _controller(catalog, measure)
    controller.tick(300, 300)

    controller.handle_add("Region A")
    controller.handle_add("Region C")
    controller.dispatch(RemoveRegionCommand("Region C"))

    assert controller.tick(300, 300) == (True, False)
    assert controller.pending_passes == 2
    assert controller.queue_passes == 1
    assert [box.region for box in pending.layouts[-1].of_type(CheckboxItem)] == ["Region A"] * 3


def test_toggle_does_not_trigger_relayout(catalog, measure):
    controller, pending, _queue = _controller(catalog, measure)
    controller.handle_add("Region A")
    controller.tick(300, 300)

    assert controller.dispatch(ToggleVariantCommand("Region A", "v1")) is False
    assert controller.dispatch(ToggleVariantCommand("Region Z", "v1")) is None
    assert controller.tick(300, 300) == (False, False)
    assert controller.model.pending_snapshot() == [("Region A", frozenset({"v2", "v3"}))]


def test_start_rebuilds_both_panels(catalog, measure):
    controller, pending, queue = _controller(catalog, measure)
    controller.tick(300, 300)
    controller.handle_add("Region A")

    promoted = controller.handle_start()

    assert promoted == ["Region A"]
    assert controller.tick(300, 300) == (True, True)
    assert pending.layouts[-1].is_empty
    assert not queue.layouts[-1].is_empty


def test_add_handler_reports_when_picker_should_reset(catalog, measure):
    controller, _pending, _queue = _controller(catalog, measure)

    assert controller.handle_add("Region A") is True
    assert controller.handle_add("Region A") is True
    assert controller.handle_add("Nowhere") is False
    assert controller.handle_add(None) is False
    assert controller.handle_add_all() is True


def test_abort_and_clear(catalog, measure):
    controller, _pending, _queue = _controller(catalog, measure)
    controller.handle_add_all()
    controller.handle_start()
    controller.handle_add("Region A")

    controller.handle_clear()
    assert controller.model.pending_snapshot() == []
    assert controller.handle_abort() == 2
    assert controller.handle_abort() == 0


def test_tick_without_sinks_keeps_flags(catalog, measure):
    model = ScreenshotQueueModel(catalog, measure)
    controller = PanelController(model)

    assert controller.tick(300, 300) == (False, False)
    assert model.is_pending_dirty() and model.is_queue_dirty()

    sinks = RecordingSink(), RecordingSink()
    controller.attach(pending_sink=sinks[0], queue_sink=sinks[1])
    assert controller.tick(300, 300) == (True, True)


def test_invalidate_forces_rebuild(catalog, measure):
    controller, pending, queue = _controller(catalog, measure)
    controller.tick(300, 300)

    controller.invalidate()

    assert controller.tick(200, 200) == (True, True)
    assert len(pending.layouts) == 2 and len(queue.layouts) == 2


def test_unknown_command_is_ignored(catalog, measure):
    controller, _pending, _queue = _controller(catalog, measure)
    assert controller.dispatch(object()) is None  # type: ignore[arg-type]


class FlakyMeasure:
    """Raises on the first call, then measures 7px per character."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self, text: str) -> float:
        self.calls += 1
        if self.calls == 1:
            raise RuntimeError("font not ready")
        return 7.0 * len(text)


class FailingOnceSink(RecordingSink):
    def __init__(self) -> None:
        super().__init__()
        self.failed = False

    def show(self, layout: PanelLayout) -> None:
        if not self.failed:
            self.failed = True
            raise RuntimeError("canvas gone")
        super().show(layout)


def test_failed_layout_keeps_panel_dirty_until_next_tick(catalog):
    model = ScreenshotQueueModel(catalog, FlakyMeasure())
    pending = RecordingSink()
    controller = PanelController(model, pending_sink=pending, queue_sink=RecordingSink())
    controller.tick(300, 300)
    model.add_region("Region A")

    with pytest.raises(RuntimeError):
        controller.tick(300, 300)

    assert model.is_pending_dirty()
    assert controller.tick(300, 300) == (True, False)
    assert not model.is_pending_dirty()
    assert [box.region for box in pending.layouts[-1].of_type(CheckboxItem)] == ["Region A"] * 3


def test_failed_show_keeps_queue_dirty(catalog, measure):
    model = ScreenshotQueueModel(catalog, measure)
    queue = FailingOnceSink()
    controller = PanelController(model, pending_sink=RecordingSink(), queue_sink=queue)

    with pytest.raises(RuntimeError):
        controller.tick(300, 300)

    assert model.is_queue_dirty()
    assert not model.is_pending_dirty()
    assert controller.tick(300, 300) == (False, True)
    assert len(queue.layouts) == 1
