import pytest

pygame = pytest.importorskip("pygame")

from gridpath.app.config import ViewerConfig
from gridpath.app.viewer import Viewer, message_for, main
from gridpath.core.controller import InteractionController, MODE_START
from gridpath.core.errors import InvalidEndpoints, OutOfBounds, InvalidState
from gridpath.core.types import IDLE


@pytest.fixture
def viewer():
    ctl = InteractionController.create(5, 4)
    v = Viewer(ctl, ViewerConfig(cols=5, rows=4))
    yield v
    pygame.quit()


def _click(v, pos):
    v.handle_events([pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos)])


def _click_cell(v, cell):
    _click(v, v._cell_rect(cell).center)


def _click_button(v, label):
    btn = next(b for b in v._buttons if b.label == label)
    _click(v, btn.rect.center)


def _key(v, key):
    v.handle_events([pygame.event.Event(pygame.KEYDOWN, key=key)])


def test_pixel_to_cell_mapping(viewer):
    assert viewer.cell_at(viewer._cell_rect((3, 2)).center) == (3, 2)
    assert viewer.cell_at((0, 0)) is None
    assert viewer.cell_at(viewer._buttons[0].rect.center) is None


def test_click_paints_wall(viewer):
    _click_cell(viewer, (2, 1))
    assert viewer.ctl.grid.is_wall(2, 1)
    _click_cell(viewer, (0, 0))
    assert not viewer.ctl.grid.is_wall(0, 0)


def test_clicks_ignored_while_running(viewer):
    _key(viewer, pygame.K_SPACE)
    assert viewer.running
    _click_cell(viewer, (2, 1))
    assert not viewer.ctl.grid.is_wall(2, 1)


def test_step_key_until_done(viewer):
    for _ in range(100):
        _key(viewer, pygame.K_n)
        if viewer.state == "Done":
            break
    assert viewer.state == "Done"
    assert viewer.snap.path[0] == (0, 0) and viewer.snap.path[-1] == (4, 3)
    assert len(viewer.snap.path) == 8
    # space does nothing once finished
    _key(viewer, pygame.K_SPACE)
    assert not viewer.running


def test_no_path_state(viewer):
    _click_cell(viewer, (3, 3))
    _click_cell(viewer, (4, 2))
    for _ in range(100):
        viewer.do_step()
        if viewer.state == "No path":
            break
    assert viewer.state == "No path"


def test_invalid_endpoint_shows_message(viewer):
    _click_cell(viewer, (1, 1))
    _key(viewer, pygame.K_s)
    assert viewer.ctl.mode == MODE_START
    _click_cell(viewer, (1, 1))
    assert viewer.ctl.start == (0, 0)
    assert viewer.status_message == message_for(InvalidEndpoints("x"))
    _click_cell(viewer, (2, 2))
    assert viewer.ctl.start == (2, 2)


def test_buttons_reset_and_clear(viewer):
    _click_cell(viewer, (2, 1))
    _click_button(viewer, "Step Once")
    assert viewer.snap.status != IDLE
    _click_button(viewer, "Reset Search")
    assert viewer.snap.status == IDLE
    assert viewer.ctl.grid.is_wall(2, 1)
    _click_button(viewer, "Clear Grid")
    assert not viewer.ctl.grid.is_wall(2, 1)


def test_algo_and_speed_controls(viewer):
    _click_button(viewer, "Algo: Dijkstra")
    assert viewer.ctl.algo == "Dijkstra"
    assert viewer.btn_algo_d.active and not viewer.btn_algo_a.active
    speed = viewer.steps_per_sec
    _click_button(viewer, "Speed +")
    assert viewer.steps_per_sec == speed + 1
    _key(viewer, pygame.K_MINUS)
    assert viewer.steps_per_sec == speed


def test_draw_and_quit(viewer):
    viewer.do_step()
    viewer._draw()
    viewer.handle_events([pygame.event.Event(pygame.QUIT)])
    assert viewer.quit_requested


def test_messages_for_errors():
    assert message_for(OutOfBounds(9, 9, 2, 2)) != message_for(InvalidEndpoints("x"))
    assert "reset" in message_for(InvalidState("x"))


def test_main_rejects_bad_config():
    with pytest.raises(SystemExit) as exc:
        main(["--cols=0"])
    assert exc.value.code == 2
