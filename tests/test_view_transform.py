"""Tests for zoom state and viewport <-> image mapping."""

import pytest

from RasterScopeViewer.core import ViewTransform


def test_zoom_fit_wide_image():
    """100x50 image in a 50x50 viewport fits at 0.5 -> 50x25."""
    view = ViewTransform((100, 50))
    view.zoom_fit((50, 50))

    assert view.fit_mode
    assert view.zoom_factor == pytest.approx(0.5)
    assert view.scaled_size() == (50, 25)


def test_zoom_steps_leave_fit_mode():
    view = ViewTransform((100, 50))
    view.zoom_fit((50, 50))
    view.zoom_in()
    assert not view.fit_mode
    assert view.zoom_factor == pytest.approx(0.6)

    view.zoom_out()
    assert view.zoom_factor == pytest.approx(0.5)
    assert not view.fit_mode


def test_zoom_out_floor():
    view = ViewTransform((10, 10))
    for _ in range(100):
        view.zoom_out()
    assert view.zoom_factor == pytest.approx(0.01)


def test_zoom_fit_rejects_empty_image():
    view = ViewTransform((0, 10))
    with pytest.raises(ValueError):
        view.zoom_fit((50, 50))


def test_to_image_space_uses_current_zoom():
    view = ViewTransform((200, 100))
    view.set_zoom(2.0)
    assert view.to_image_space((30, 10)) == (15.0, 5.0)
    assert view.to_viewport_space((15, 5)) == (30.0, 10.0)


def test_mapping_refits_after_viewport_resize():
    """A selection drawn after a resize maps with the zoom now on screen."""
    view = ViewTransform((100, 100))
    view.zoom_fit((50, 50))
    assert view.zoom_factor == pytest.approx(0.5)

    x, y = view.to_image_space((25, 10), viewport=(100, 100))
    assert view.zoom_factor == pytest.approx(1.0)
    assert (x, y) == pytest.approx((25.0, 10.0))


def test_manual_zoom_ignores_viewport_on_mapping():
    view = ViewTransform((100, 100))
    view.set_zoom(4.0)
    assert view.to_image_space((40, 8), viewport=(10, 10)) == (10.0, 2.0)


def test_refit_keeps_zoom_for_empty_image():
    view = ViewTransform((100, 100))
    view.zoom_fit((50, 50))
    view.set_image_size(0, 0)
    view.refit((80, 80))
    assert view.zoom_factor == pytest.approx(0.5)
    assert view.to_image_space((10, 10), viewport=(80, 80)) == (20.0, 20.0)
