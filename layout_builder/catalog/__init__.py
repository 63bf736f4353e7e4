"""Catalogue des modules insérables."""
from .builtin import BUILTIN_MODULES
from .library import (
    BlockDescriptor,
    FormDescriptor,
    ModuleCatalog,
    HttpLibrarySource,
    LibrarySource,
    block_to_module,
    form_to_module,
    BLOCKS_CATEGORY,
    FORMS_CATEGORY,
)

__all__ = [
    "BUILTIN_MODULES",
    "BlockDescriptor",
    "FormDescriptor",
    "ModuleCatalog",
    "HttpLibrarySource",
    "LibrarySource",
    "block_to_module",
    "form_to_module",
    "BLOCKS_CATEGORY",
    "FORMS_CATEGORY",
]
