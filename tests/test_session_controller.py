from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from jump_motion.errors import (
    CaptureInstallError,
    NoActiveViewError,
    OverlayConstructionError,
)
from jump_motion.host import (
    CommandExecutor,
    FixedViewResolver,
    KeyFilterCapture,
    StaticCommandSurface,
)
from jump_motion.labels import JumpTarget, LabelAssignment, TrieLabelOverlay
from jump_motion.runtime.config import NON_CHARACTER, JumpConfig
from jump_motion.session import ActivationController, SessionEnd


class RecordingView:
    """Editor view double that logs every host-visible side effect."""

    def __init__(self, calls: List[str], *, name: str = "main") -> None:
        self.name = name
        self.caret: Tuple[int, int] = (0, 0)
        self.calls = calls
        self.filters: list = []
        self.fail_send_key = False

    def visible_lines(self) -> Tuple[int, Sequence[str]]:
        return 0, ("alpha beta",)

    def move_caret(self, position: Tuple[int, int]) -> None:
        self.calls.append(f"move:{position[0]},{position[1]}")
        self.caret = position

    def send_key(self, key: str) -> None:
        self.calls.append(f"send_key:{key}")
        if self.fail_send_key:
            raise RuntimeError("input pipeline refused synthetic key")

    def add_key_filter(self, key_filter) -> None:
        self.calls.append("capture:install")
        self.filters.append(key_filter)

    def remove_key_filter(self, key_filter) -> None:
        self.calls.append("capture:remove")
        self.filters.remove(key_filter)


class RecordingOverlay(TrieLabelOverlay):
    def __init__(self, view, assignments, calls: List[str]) -> None:
        self.calls = calls
        super().__init__(view, assignments)
        calls.append("overlay:create")

    def release(self) -> None:
        if not self.released:
            self.calls.append("overlay:release")
        super().release()


def make_targets(codes: Dict[str, Tuple[int, int]]) -> List[LabelAssignment]:
    return [
        LabelAssignment(code=code, target=JumpTarget(position=position))
        for code, position in codes.items()
    ]


def make_surface(calls: List[str], *, with_vim: bool = True) -> StaticCommandSurface:
    surface = StaticCommandSurface()
    if with_vim:
        surface.register("Vim.SetDisabled", lambda: calls.append("vim:disable"))
        surface.register("Vim.SetEnabled", lambda: calls.append("vim:enable"))
    return surface


def make_controller(
    codes: Optional[Dict[str, Tuple[int, int]]] = None,
    *,
    calls: Optional[List[str]] = None,
    view: Optional[RecordingView] = None,
    with_vim: bool = True,
) -> Tuple[ActivationController, RecordingView, List[str]]:
    log = calls if calls is not None else []
    target_view = view or RecordingView(log)
    assignments = make_targets(codes or {"a": (0, 0), "s": (0, 6), "df": (1, 2)})

    def overlay_factory(view, text_structure):
        del text_structure
        return RecordingOverlay(view, assignments, log)

    def capture_factory(view):
        return KeyFilterCapture(view).install()

    controller = ActivationController(
        views=FixedViewResolver(target_view),
        overlay_factory=overlay_factory,
        capture_factory=capture_factory,
        commands=CommandExecutor(make_surface(log, with_vim=with_vim)),
        config=JumpConfig(),
    )
    return controller, target_view, log


def test_activate_runs_setup_in_order() -> None:
    controller, view, calls = make_controller()

    assert controller.activate() is True

    assert calls == ["vim:disable", "overlay:create", "capture:install"]
    assert controller.is_active
    assert controller.code_buffer == ""
    assert len(view.filters) == 1


def test_activate_without_view_raises_and_changes_nothing() -> None:
    calls: List[str] = []
    controller = ActivationController(
        views=FixedViewResolver(None),
        overlay_factory=lambda view, structure: pytest.fail("overlay built"),
        commands=CommandExecutor(make_surface(calls)),
    )

    with pytest.raises(NoActiveViewError):
        controller.activate()

    assert controller.session is None
    assert calls == []


def test_scenario_two_character_code_navigates() -> None:
    controller, view, calls = make_controller()
    controller.activate()

    pending = controller.on_character_produced("d")

    assert pending is not None and pending.status == "pending"
    assert controller.code_buffer == "d"
    assert view.filters

    matched = controller.on_character_produced("f")

    assert matched is not None and matched.status == "navigated"
    assert matched.target == JumpTarget(position=(1, 2))
    assert view.caret == (1, 2)
    assert not controller.is_active
    assert view.filters == []


def test_prefix_narrowing_over_every_code() -> None:
    codes = {"a": (0, 0), "sd": (0, 3), "sf": (0, 5), "ghj": (2, 1)}
    for code, position in codes.items():
        controller, view, _ = make_controller(codes)
        controller.activate()

        statuses = [controller.on_character_produced(char) for char in code]

        assert all(r is not None and r.status == "pending" for r in statuses[:-1])
        final = statuses[-1]
        assert final is not None and final.status == "navigated"
        assert view.caret == position
        assert not controller.is_active


def test_unknown_character_ends_session_silently() -> None:
    controller, view, calls = make_controller({"a": (0, 0), "bc": (0, 4)})
    controller.activate()

    result = controller.on_character_produced("z")

    assert result is not None and result.status == "no_candidates"
    assert not controller.is_active
    assert not any(call.startswith("move:") for call in calls)
    assert view.filters == []


def test_sentinel_cancels_and_tears_down_once() -> None:
    controller, view, calls = make_controller({"a": (0, 0)})
    ended: List[SessionEnd] = []
    controller.session_ended.subscribe(ended.append)
    controller.activate()

    result = controller.on_character_produced(NON_CHARACTER)

    assert result is None
    assert [end.reason for end in ended] == ["cancelled"]
    assert calls.count("capture:remove") == 1
    assert calls.count("overlay:release") == 1
    assert not any(call.startswith("move:") for call in calls)


def test_capture_forwards_control_keys_as_sentinel() -> None:
    controller, view, calls = make_controller({"a": (0, 0)})
    controller.activate()

    consumed = view.filters[0]("left", None)

    assert consumed is True
    assert not controller.is_active
    assert "capture:remove" in calls


def test_teardown_order() -> None:
    controller, _, calls = make_controller()
    controller.activate()
    calls.clear()

    assert controller.deactivate() is True

    assert calls == [
        "capture:remove",
        "vim:enable",
        "send_key:ESC",
        "overlay:release",
    ]


def test_deactivate_when_idle_is_noop() -> None:
    controller, _, calls = make_controller()

    assert controller.deactivate() is False
    controller.activate()
    controller.deactivate()
    calls.clear()

    assert controller.deactivate() is False
    assert calls == []


def test_restart_tears_down_previous_session_first() -> None:
    controller, view, calls = make_controller()
    controller.activate()
    first = controller.session
    controller.on_character_produced("d")
    calls.clear()

    controller.activate()

    assert calls == [
        "capture:remove",
        "vim:enable",
        "send_key:ESC",
        "overlay:release",
        "vim:disable",
        "overlay:create",
        "capture:install",
    ]
    assert controller.session is not first
    assert controller.code_buffer == ""
    assert len(view.filters) == 1


def test_escape_failure_still_releases_everything() -> None:
    controller, view, calls = make_controller()
    ended: List[SessionEnd] = []
    controller.session_ended.subscribe(ended.append)
    view.fail_send_key = True
    controller.activate()
    session = controller.session
    assert session is not None

    result = controller.on_character_produced("a")

    assert result is not None and result.status == "navigated"
    assert view.filters == []
    assert "vim:enable" in calls
    assert "overlay:release" in calls
    assert session.code_buffer == ""
    assert session.subscription.disposed
    assert ended[-1].failed_steps == ("neutralize",)


def test_overlay_release_failure_does_not_block_restart() -> None:
    calls: List[str] = []
    view = RecordingView(calls)

    class BrokenOverlay(RecordingOverlay):
        def release(self) -> None:
            super().release()
            raise RuntimeError("adornment layer gone")

    controller = ActivationController(
        views=FixedViewResolver(view),
        overlay_factory=lambda v, s: BrokenOverlay(
            v, make_targets({"a": (0, 0)}), calls
        ),
        capture_factory=lambda v: KeyFilterCapture(v).install(),
        commands=CommandExecutor(make_surface(calls)),
    )
    controller.activate()
    controller.activate()

    assert calls.count("capture:install") == 2
    assert calls.count("capture:remove") == 1
    assert len(view.filters) == 1


def test_mode_guard_toggles_once_per_session() -> None:
    controller, _, calls = make_controller()

    controller.activate()
    controller.on_character_produced("a")
    controller.deactivate()

    assert calls.count("vim:disable") == 1
    assert calls.count("vim:enable") == 1
    assert calls.index("vim:disable") < calls.index("capture:install")


def test_no_competing_mode_means_no_toggle() -> None:
    controller, _, calls = make_controller(with_vim=False)

    controller.activate()
    controller.deactivate()

    assert not any(call.startswith("vim:") for call in calls)


def test_overlay_failure_resumes_mode_and_skips_capture() -> None:
    calls: List[str] = []
    view = RecordingView(calls)

    def broken_factory(view, structure):
        raise LookupError("no text structure for buffer")

    controller = ActivationController(
        views=FixedViewResolver(view),
        overlay_factory=broken_factory,
        capture_factory=lambda v: KeyFilterCapture(v).install(),
        commands=CommandExecutor(make_surface(calls)),
    )

    with pytest.raises(OverlayConstructionError) as info:
        controller.activate()

    assert isinstance(info.value.__cause__, LookupError)
    assert calls == ["vim:disable", "vim:enable"]
    assert view.filters == []
    assert controller.session is None


def test_capture_failure_releases_overlay() -> None:
    calls: List[str] = []
    view = RecordingView(calls)

    def broken_capture(view):
        raise OSError("filter chain locked")

    controller = ActivationController(
        views=FixedViewResolver(view),
        overlay_factory=lambda v, s: RecordingOverlay(
            v, make_targets({"a": (0, 0)}), calls
        ),
        capture_factory=broken_capture,
        commands=CommandExecutor(make_surface(calls)),
    )

    with pytest.raises(CaptureInstallError):
        controller.activate()

    assert calls == ["vim:disable", "overlay:create", "overlay:release", "vim:enable"]
    assert not controller.is_active


def test_characters_after_session_end_are_ignored() -> None:
    controller, _, _ = make_controller()
    controller.activate()
    controller.on_character_produced("a")

    assert controller.on_character_produced("s") is None
    assert controller.code_buffer is None


def test_overlay_match_error_ends_session() -> None:
    calls: List[str] = []
    view = RecordingView(calls)

    class ExplodingOverlay(RecordingOverlay):
        def try_match(self, code: str):
            raise ValueError("stale snapshot")

    controller = ActivationController(
        views=FixedViewResolver(view),
        overlay_factory=lambda v, s: ExplodingOverlay(
            v, make_targets({"a": (0, 0)}), calls
        ),
        capture_factory=lambda v: KeyFilterCapture(v).install(),
    )
    controller.activate()

    assert controller.on_character_produced("a") is None
    assert not controller.is_active
    assert view.filters == []
    assert "overlay:release" in calls


def test_retrigger_from_navigation_callback_keeps_new_session() -> None:
    controller, view, calls = make_controller({"a": (0, 0)})
    original_move = view.move_caret
    retriggered: List[bool] = []

    def move_and_retrigger(position):
        original_move(position)
        if not retriggered:
            retriggered.append(True)
            controller.activate()

    view.move_caret = move_and_retrigger  # type: ignore[method-assign]
    controller.activate()
    first = controller.session

    result = controller.on_character_produced("a")

    assert result is not None and result.status == "navigated"
    assert controller.is_active
    assert controller.session is not first
    assert len(view.filters) == 1


def test_session_events_carry_reason_and_code() -> None:
    controller, _, _ = make_controller()
    ended: List[SessionEnd] = []
    started: list = []
    controller.session_started.subscribe(started.append)
    controller.session_ended.subscribe(ended.append)

    controller.activate()
    controller.on_character_produced("d")
    controller.on_character_produced("x")

    assert len(started) == 1
    assert ended[0].reason == "no_candidates"
    assert ended[0].code == "dx"
    assert ended[0].view_name == "main"


def test_activate_during_teardown_is_refused() -> None:
    calls: List[str] = []
    view = RecordingView(calls)
    refused: List[bool] = []

    class RetriggeringOverlay(RecordingOverlay):
        def release(self) -> None:
            super().release()
            refused.append(controller.activate())

    controller = ActivationController(
        views=FixedViewResolver(view),
        overlay_factory=lambda v, s: RetriggeringOverlay(
            v, make_targets({"a": (0, 0)}), calls
        ),
        capture_factory=lambda v: KeyFilterCapture(v).install(),
    )
    controller.activate()

    assert controller.deactivate() is True

    assert refused == [False]
    assert not controller.is_active
    assert view.filters == []
