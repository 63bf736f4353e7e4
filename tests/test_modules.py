"""Tests gestion des modules dans une colonne."""
from layout_builder.core.schemas import Module
from layout_builder.layout.modules import (
    add_module, instantiate, remove_module, remove_module_by_id, reorder_modules,
)
from layout_builder.layout.queries import count_modules_in_section, find_column
from layout_builder.layout.results import NotFound

ADDR = ("content-section", "content-row-1", "content-col-1")


def _fill(sections, ids, *names):
    for name in names:
        sections = add_module(sections, *ADDR, {"id": name, "name": name.title()}, ids).sections
    return sections


def _module_names(sections):
    return [m.name for m in find_column(sections, *ADDR).modules]


def test_instantiate_copie_le_gabarit(ids, speakers_template):
    template = Module.model_validate(speakers_template)
    module = instantiate(template, ids)
    assert module.id == "speakers-1001"
    assert module.default_props == {"title": "Speakers", "limit": 8}
    module.default_props["title"] = "Changé"
    assert template.default_props["title"] == "Speakers"
    assert template.id == "speakers"


def test_add_module_ids_distincts(sections, ids, speakers_template):
    sections = add_module(sections, *ADDR, speakers_template, ids).sections
    sections = add_module(sections, *ADDR, speakers_template, ids).sections
    modules = find_column(sections, *ADDR).modules
    assert len(modules) == 2
    assert modules[0].id != modules[1].id
    assert all(m.id.startswith("speakers-") for m in modules)


def test_add_module_colonne_inconnue(sections, ids, speakers_template):
    result = add_module(sections, "content-section", "content-row-1", "nope", speakers_template, ids)
    assert isinstance(result, NotFound)
    assert count_modules_in_section(result.sections[1]) == 0


def test_remove_module(sections, ids):
    sections = _fill(sections, ids, "hero", "text", "tickets")
    result = remove_module(sections, *ADDR, 1)
    assert _module_names(result.sections) == ["Hero", "Tickets"]


def test_remove_module_hors_bornes(sections, ids):
    sections = _fill(sections, ids, "hero")
    result = remove_module(sections, *ADDR, 3)
    assert isinstance(result, NotFound)
    assert result.address.index == 3
    assert _module_names(result.sections) == ["Hero"]


def test_remove_module_by_id(sections, ids):
    sections = _fill(sections, ids, "hero", "text")
    target = find_column(sections, *ADDR).modules[0].id
    result = remove_module_by_id(sections, *ADDR, target)
    assert _module_names(result.sections) == ["Text"]


def test_reorder_modules(sections, ids):
    sections = _fill(sections, ids, "hero", "text", "tickets")
    result = reorder_modules(sections, *ADDR, 0, 2)
    assert _module_names(result.sections) == ["Text", "Tickets", "Hero"]
    assert _module_names(sections) == ["Hero", "Text", "Tickets"]


def test_reorder_modules_autres_colonnes_intactes(sections, ids):
    sections = _fill(sections, ids, "hero", "text")
    header_before = sections[0]
    result = reorder_modules(sections, *ADDR, 1, 0)
    assert result.sections[0] == header_before
