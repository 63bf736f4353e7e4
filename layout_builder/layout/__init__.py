"""Layout — mutations de l'arbre, requêtes, sérialisation."""
from .results import Address, Ok, NotFound, MutationResult
from .parser import serialize, parse, parse_or_default, extract_layout_json
from .sections import (
    add_section, duplicate_section, delete_section, can_delete_section, reorder_sections,
    rename_section, update_section_style, update_section_styling, update_section_rows,
    add_row, duplicate_row, delete_row, reorder_rows, change_row_layout, update_column_widths,
    update_row_settings, update_row_style, update_row_styling,
    update_column_style, update_column_styling,
)
from .modules import add_module, remove_module, remove_module_by_id, reorder_modules, instantiate
from .queries import (
    find_section, find_row, find_column, find_module, module_index, iter_ids,
    array_move, layout_name, row_layout_name, normalize_column_widths,
    count_modules_in_row, count_modules_in_section, is_section_empty,
)

__all__ = [
    "Address", "Ok", "NotFound", "MutationResult",
    "serialize", "parse", "parse_or_default", "extract_layout_json",
    "add_section", "duplicate_section", "delete_section", "can_delete_section", "reorder_sections",
    "rename_section", "update_section_style", "update_section_styling", "update_section_rows",
    "add_row", "duplicate_row", "delete_row", "reorder_rows", "change_row_layout", "update_column_widths",
    "update_row_settings", "update_row_style", "update_row_styling",
    "update_column_style", "update_column_styling",
    "add_module", "remove_module", "remove_module_by_id", "reorder_modules", "instantiate",
    "find_section", "find_row", "find_column", "find_module", "module_index", "iter_ids",
    "array_move", "layout_name", "row_layout_name", "normalize_column_widths",
    "count_modules_in_row", "count_modules_in_section", "is_section_empty",
]
