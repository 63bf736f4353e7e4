"""Tests gestion des sections et des rows (transformations pures)."""
import pytest

from layout_builder.layout import sections as ops
from layout_builder.layout.modules import add_module
from layout_builder.layout.queries import find_row, find_section, iter_ids
from layout_builder.layout.results import NotFound, Ok


def _ids_of(section):
    return set(iter_ids([section]))


# ── Sections ──────────────────────────────────────────────────────────────────

class TestSections:
    def test_add_section_en_fin(self, sections, ids):
        out = ops.add_section(sections, ids)
        assert len(out) == 3
        added = out[-1]
        assert len(added.rows) == 1
        assert len(added.rows[0].columns) == 1
        assert added.rows[0].columns[0].width == 100
        assert len(sections) == 2

    def test_duplicate_section(self, sections, ids):
        result = ops.duplicate_section(sections, "header-section", ids)
        assert isinstance(result, Ok)
        out = result.sections
        assert [s.id for s in out][0] == "header-section"
        clone = out[1]
        assert clone.name == "Header Section Copy"
        assert _ids_of(clone).isdisjoint(_ids_of(sections[0]))
        assert out[2].id == "content-section"

    def test_duplicate_section_inconnue(self, sections, ids):
        result = ops.duplicate_section(sections, "nope", ids)
        assert isinstance(result, NotFound)
        assert result.address.section_id == "nope"
        assert result.sections == sections

    def test_duplicate_section_isole_la_copie(self, sections, ids, speakers_template):
        sections = add_module(sections, "header-section", "header-row-1", "header-col-1",
                              speakers_template, ids).sections
        out = ops.duplicate_section(sections, "header-section", ids).sections
        clone = out[1]
        row, column = clone.rows[0], clone.rows[0].columns[0]

        column.modules[0].default_props["limit"] = 99
        restyled = ops.update_column_style(out, clone.id, row.id, column.id, {"padding": "40px"}).sections

        original = find_row(restyled, "header-section", "header-row-1").columns[0]
        assert original.modules[0].default_props["limit"] == 8
        assert original.style is None
        assert sections[0].rows[0].columns[0].modules[0].default_props["limit"] == 8

    def test_update_section_rows_copie_les_rows(self, sections):
        rows = list(sections[0].rows)
        result = ops.update_section_rows(sections, "content-section", rows)
        stored = find_section(result.sections, "content-section").rows
        assert [r.id for r in stored] == ["header-row-1"]

        rows[0].columns[0].width = 10
        rows.append(rows[0])
        assert len(stored) == 1
        assert stored[0].columns[0].width == 100

    def test_delete_section(self, sections):
        result = ops.delete_section(sections, "header-section")
        assert result.ok
        assert [s.id for s in result.sections] == ["content-section"]

    def test_can_delete_section(self, sections):
        assert ops.can_delete_section(sections) is True
        assert ops.can_delete_section(sections[:1]) is False

    def test_reorder_sections(self, sections):
        result = ops.reorder_sections(sections, 0, 1)
        assert [s.id for s in result.sections] == ["content-section", "header-section"]

    def test_reorder_sections_hors_bornes(self, sections):
        result = ops.reorder_sections(sections, 0, 5)
        assert not result.ok
        assert result.sections == sections

    def test_rename_section(self, sections):
        result = ops.rename_section(sections, "content-section", "Main")
        assert find_section(result.sections, "content-section").name == "Main"
        assert sections[1].name == "Content Section"

    def test_update_section_style_fusion(self, sections, ids):
        sections = ops.add_section(sections, ids)
        sid = sections[-1].id
        result = ops.update_section_style(sections, sid, {"backgroundColor": "#000"})
        style = find_section(result.sections, sid).style
        assert style.background_color == "#000"
        assert style.padding.top == "30px"

    def test_update_section_style_none_retire_la_cle(self, sections, ids):
        sections = ops.add_section(sections, ids)
        sid = sections[-1].id
        result = ops.update_section_style(sections, sid, {"background_color": None})
        assert find_section(result.sections, sid).style.background_color is None

    def test_update_section_styling(self, sections):
        result = ops.update_section_styling(sections, "header-section", {"opacity": 0.5})
        styling = find_section(result.sections, "header-section").styling
        assert styling.opacity == 0.5
        assert styling.border_color == "#e0e0e0"


# ── Rows ──────────────────────────────────────────────────────────────────────

class TestRows:
    def test_add_row(self, sections, ids):
        result = ops.add_row(sections, "content-section", ids)
        assert len(find_section(result.sections, "content-section").rows) == 2
        assert len(find_section(sections, "content-section").rows) == 1

    def test_add_row_section_inconnue(self, sections, ids):
        result = ops.add_row(sections, "nope", ids)
        assert isinstance(result, NotFound)

    def test_duplicate_row_apres_la_source(self, sections, ids):
        sections = ops.add_row(sections, "content-section", ids).sections
        result = ops.duplicate_row(sections, "content-section", "content-row-1", ids)
        rows = find_section(result.sections, "content-section").rows
        assert len(rows) == 3
        assert rows[0].id == "content-row-1"
        assert rows[1].id not in ("content-row-1", sections[1].rows[1].id)
        assert rows[1].columns[0].id != "content-col-1"
        assert rows[2].id == sections[1].rows[1].id

    def test_delete_row(self, sections):
        result = ops.delete_row(sections, "header-section", "header-row-1")
        assert find_section(result.sections, "header-section").rows == []

    def test_delete_row_inconnue(self, sections):
        result = ops.delete_row(sections, "header-section", "nope")
        assert not result.ok
        assert result.address.row_id == "nope"

    def test_reorder_rows(self, sections, ids):
        sections = ops.add_row(sections, "content-section", ids).sections
        second = sections[1].rows[1].id
        result = ops.reorder_rows(sections, "content-section", 1, 0)
        assert [r.id for r in result.sections[1].rows] == [second, "content-row-1"]

    def test_update_row_settings_fusion(self, sections):
        result = ops.update_row_settings(sections, "header-section", "header-row-1", {"sticky": True, "gap": "8px"})
        result = ops.update_row_settings(result.sections, "header-section", "header-row-1", {"gap": None})
        assert find_row(result.sections, "header-section", "header-row-1").settings == {"sticky": True}

    def test_update_row_styling(self, sections):
        result = ops.update_row_styling(sections, "header-section", "header-row-1", {"minHeight": "200px"})
        row = find_row(result.sections, "header-section", "header-row-1")
        assert row.styling.min_height == "200px"

    def test_update_column_styling(self, sections):
        result = ops.update_column_styling(
            sections, "header-section", "header-row-1", "header-col-1", {"textAlign": "center"})
        col = find_row(result.sections, "header-section", "header-row-1").columns[0]
        assert col.styling.text_align == "center"

    def test_update_column_style_colonne_inconnue(self, sections):
        result = ops.update_column_style(sections, "header-section", "header-row-1", "nope", {"gap": "1px"})
        assert isinstance(result, NotFound)
        assert result.address.column_id == "nope"


# ── Layout de colonnes ────────────────────────────────────────────────────────

class TestChangeRowLayout:
    def _with_module(self, sections, ids, template):
        return add_module(sections, "header-section", "header-row-1", "header-col-1", template, ids).sections

    def test_colonnes_conservees_et_ajoutees(self, sections, ids, speakers_template):
        sections = self._with_module(sections, ids, speakers_template)
        result = ops.change_row_layout(sections, "header-section", "header-row-1", [50, 50], ids)
        cols = find_row(result.sections, "header-section", "header-row-1").columns
        assert [c.width for c in cols] == [50, 50]
        assert cols[0].id == "header-col-1"
        assert len(cols[0].modules) == 1
        assert cols[1].id.startswith("col-1-")
        assert cols[1].modules == []

    def test_colonnes_en_trop_perdues(self, sections, ids):
        sections = ops.change_row_layout(sections, "header-section", "header-row-1", [25, 25, 50], ids).sections
        result = ops.change_row_layout(sections, "header-section", "header-row-1", [100], ids)
        cols = find_row(result.sections, "header-section", "header-row-1").columns
        assert [c.id for c in cols] == ["header-col-1"]

    @pytest.mark.parametrize("widths", [[], [50, 0], [-10, 110]])
    def test_largeurs_invalides(self, sections, ids, widths):
        with pytest.raises(ValueError):
            ops.change_row_layout(sections, "header-section", "header-row-1", widths, ids)

    def test_row_inconnue(self, sections, ids):
        result = ops.change_row_layout(sections, "header-section", "nope", [50, 50], ids)
        assert isinstance(result, NotFound)


class TestUpdateColumnWidths:
    def test_largeurs_appliquees_colonnes_conservees(self, sections, ids, speakers_template):
        sections = add_module(sections, "header-section", "header-row-1", "header-col-1",
                              speakers_template, ids).sections
        sections = ops.change_row_layout(sections, "header-section", "header-row-1", [50, 50], ids).sections
        result = ops.update_column_widths(sections, "header-section", "header-row-1", [70, 30])
        assert isinstance(result, Ok)
        cols = find_row(result.sections, "header-section", "header-row-1").columns
        assert [c.width for c in cols] == [70, 30]
        assert cols[0].id == "header-col-1"
        assert len(cols[0].modules) == 1
        assert find_row(sections, "header-section", "header-row-1").columns[0].width == 50

    def test_largeur_absente_garde_l_ancienne(self, sections, ids):
        sections = ops.change_row_layout(sections, "header-section", "header-row-1", [25, 25, 50], ids).sections
        result = ops.update_column_widths(sections, "header-section", "header-row-1", [40, None])
        cols = find_row(result.sections, "header-section", "header-row-1").columns
        assert [c.width for c in cols] == [40, 25, 50]

    def test_largeurs_en_trop_ignorees(self, sections):
        result = ops.update_column_widths(sections, "header-section", "header-row-1", [60, 40])
        cols = find_row(result.sections, "header-section", "header-row-1").columns
        assert [c.width for c in cols] == [60]

    @pytest.mark.parametrize("widths", [[0], [50, -5]])
    def test_largeurs_invalides(self, sections, widths):
        with pytest.raises(ValueError):
            ops.update_column_widths(sections, "header-section", "header-row-1", widths)

    def test_row_inconnue(self, sections):
        result = ops.update_column_widths(sections, "header-section", "nope", [50])
        assert isinstance(result, NotFound)
        assert result.address.row_id == "nope"
