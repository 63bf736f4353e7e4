"""Tests drag & drop — réordonnancement dans une liste de frères."""
from layout_builder.editor.drag import DragController, compute_move, move_indices
from layout_builder.layout.queries import array_move, layout_name

ORDER = ["a", "b", "c", "d"]


class TestComputeMove:
    def test_deplacement_vers_le_bas(self):
        assert compute_move(ORDER, "a", "c") == ["b", "c", "a", "d"]

    def test_deplacement_vers_le_haut(self):
        assert compute_move(ORDER, "d", "b") == ["a", "d", "b", "c"]

    def test_sur_soi_meme(self):
        assert compute_move(ORDER, "b", "b") is None

    def test_hors_cible(self):
        assert compute_move(ORDER, "b", None) is None

    def test_autre_liste(self):
        assert compute_move(ORDER, "b", "z") is None

    def test_indices(self):
        assert move_indices(ORDER, "b", "d") == (1, 3)


class TestDragController:
    def test_session_complete(self):
        drag = DragController()
        drag.start("c")
        assert drag.is_dragging
        assert drag.active_item(ORDER) == "c"
        assert drag.drop(ORDER, "a") == (2, 0)
        assert not drag.is_dragging

    def test_drop_sans_session(self):
        assert DragController().drop(ORDER, "a") is None

    def test_annulation(self):
        drag = DragController()
        drag.start("a")
        drag.cancel()
        assert drag.drop(ORDER, "b") is None

    def test_une_seule_session(self):
        drag = DragController()
        drag.start("a")
        drag.start("b")
        assert drag.drop(ORDER, "d") == (1, 3)


def test_array_move_nouvelle_liste():
    moved = array_move(ORDER, 0, 3)
    assert moved == ["b", "c", "d", "a"]
    assert ORDER == ["a", "b", "c", "d"]


def test_layout_name():
    assert layout_name([50, 50]) == "2 Columns"
    assert layout_name([33, 34, 33]) == "3 Columns"
    assert layout_name([66.67, 33.33]) == "2/3 + 1/3"
    assert layout_name([40, 60]) == "Custom"
