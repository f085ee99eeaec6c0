"""Tests for the selection state machine and bounded undo history."""

import numpy as np
import pytest

from RasterScopeViewer.core import RasterBuffer, Rect, SelectionAndHistory, SelectionState


def _img(value=0, w=10, h=10):
    return RasterBuffer.filled(w, h, value)


@pytest.mark.parametrize("k", [1, 2, 5, 16, 17, 18, 40])
def test_history_length_is_bounded(k):
    editor = SelectionAndHistory()
    for i in range(k):
        editor.set_image(_img(i))
    assert len(editor.history) == min(k - 1, 16)


def test_oldest_snapshot_is_evicted():
    editor = SelectionAndHistory()
    for i in range(20):
        editor.set_image(_img(i))
    restored = []
    while editor.undo():
        restored.append(editor.current.intensity(0, 0))
    assert restored == list(range(18, 2, -1))


def test_current_image_is_never_in_history():
    editor = SelectionAndHistory()
    for i in range(4):
        editor.set_image(_img(i))
        assert editor.current not in editor.history
    editor.undo()
    assert editor.current not in editor.history


def test_undo_restores_previous_and_refits():
    editor = SelectionAndHistory()
    editor.viewport = (20, 20)
    editor.set_image(_img(1, 10, 10))
    editor.set_image(_img(2, 40, 10))
    assert editor.view.zoom_factor == pytest.approx(0.5)

    assert editor.undo() is True
    assert editor.current.intensity(0, 0) == 1
    assert editor.view.fit_mode
    assert editor.view.zoom_factor == pytest.approx(2.0)


def test_undo_on_empty_history_changes_nothing():
    editor = SelectionAndHistory()
    editor.set_image(_img(7))
    editor.set_selection(Rect(1, 1, 3, 3))
    before = editor.current

    assert editor.undo() is False
    assert editor.current is before
    assert editor.selection == Rect(1, 1, 3, 3)


def test_no_redo_after_undo():
    editor = SelectionAndHistory()
    editor.set_image(_img(1))
    editor.set_image(_img(2))
    editor.undo()
    assert editor.undo() is False
    assert editor.current.intensity(0, 0) == 1


def test_drag_selection_spans_both_points():
    editor = SelectionAndHistory()
    editor.set_image(_img())
    editor.pointer_down((5, 5))
    assert editor.state is SelectionState.SELECTING

    editor.pointer_move((2, 8))
    assert editor.selection == Rect(2, 5, 3, 3)

    editor.pointer_up((8, 1))
    assert editor.state is SelectionState.IDLE
    assert editor.selection == Rect(5, 1, 3, 4)


def test_drag_outside_image_is_clamped():
    """Dragging past the window edge keeps updating, clamped to the image."""
    editor = SelectionAndHistory()
    editor.set_image(_img())
    editor.pointer_down((4, 4))
    editor.pointer_move((50, -20))
    assert editor.selection == Rect(4, 0, 6, 4)
    editor.pointer_up((-3, 30))
    assert editor.selection == Rect(0, 4, 4, 6)


def test_click_without_drag_gives_empty_selection():
    editor = SelectionAndHistory()
    editor.set_image(_img())
    editor.pointer_down((3, 3))
    editor.pointer_up((3, 3))
    assert editor.selection == Rect(3, 3, 0, 0)
    assert editor.selection.is_empty


def test_move_while_idle_is_ignored():
    editor = SelectionAndHistory()
    editor.set_image(_img())
    editor.pointer_move((3, 3))
    assert editor.selection is None
    assert editor.state is SelectionState.IDLE


def test_selection_clamped_after_image_shrinks():
    editor = SelectionAndHistory()
    editor.set_image(_img(0, 10, 10))
    editor.set_selection(Rect(2, 2, 6, 6))
    editor.set_image(RasterBuffer(np.zeros((4, 4), dtype=np.uint8)))
    assert editor.selection == Rect(2, 2, 2, 2)


def test_set_image_rejects_non_buffer():
    editor = SelectionAndHistory()
    with pytest.raises(TypeError):
        editor.set_image(np.zeros((2, 2), dtype=np.uint8))


def test_setting_current_image_again_pushes_nothing():
    editor = SelectionAndHistory()
    editor.set_image(_img(1))
    current = editor.current
    editor.set_image(current)
    assert editor.current is current
    assert current not in editor.history
    assert len(editor.history) == 0


def test_reset_leaves_fit_mode():
    editor = SelectionAndHistory()
    editor.viewport = (20, 20)
    editor.set_image(_img(1))
    assert editor.view.fit_mode
    editor.reset()
    assert not editor.view.fit_mode
    assert editor.view.to_image_space((4, 4), viewport=(30, 30)) == pytest.approx((2.0, 2.0))


def test_empty_image_leaves_fit_mode():
    editor = SelectionAndHistory()
    editor.set_image(_img(1))
    editor.set_image(RasterBuffer(np.zeros((0, 0), dtype=np.uint8)))
    assert not editor.view.fit_mode
    editor.pointer_down((1, 1))
    editor.pointer_up((3, 3))
    assert editor.selection.is_empty
