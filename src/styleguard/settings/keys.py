"""Stable setting keys and their value types."""

from __future__ import annotations

from typing import Any

from styleguard.models import (
    AllOtherImports,
    AllOtherStaticImports,
    BlankLine,
    ImportsOnPaste,
    ModuleImportsGroup,
    PackageGroup,
)

# Application-level auto import
ADD_UNAMBIGUOUS_IMPORTS_ON_THE_FLY = "add_unambiguous_imports_on_the_fly"
OPTIMIZE_IMPORTS_ON_THE_FLY = "optimize_imports_on_the_fly"
ADD_IMPORTS_ON_PASTE = "add_imports_on_paste"
SHOW_IMPORT_POPUP = "show_import_popup"

# Project-level override
PROJECT_OPTIMIZE_IMPORTS_ON_THE_FLY = "project_optimize_imports_on_the_fly"

# Code style
INDENT_DETECTION_ENABLED = "indent_detection_enabled"
WILDCARD_CLASS_THRESHOLD = "wildcard_class_threshold"
WILDCARD_NAMES_THRESHOLD = "wildcard_names_threshold"
IMPORT_LAYOUT_ORDER = "import_layout_order"
MODULE_IMPORTS_GROUP = "module_imports_group"
USE_SINGLE_CLASS_IMPORTS = "use_single_class_imports"
INSERT_INNER_CLASS_IMPORTS = "insert_inner_class_imports"
LAYOUT_STATIC_IMPORTS_SEPARATELY = "layout_static_imports_separately"
PACKAGES_TO_USE_IMPORT_ON_DEMAND = "packages_to_use_import_on_demand"
USE_FQ_CLASS_NAMES = "use_fq_class_names"
DO_NOT_SEPARATE_MODULE_IMPORTS = "do_not_separate_module_imports"
DELETE_UNUSED_MODULE_IMPORTS = "delete_unused_module_imports"
CLASS_NAMES_IN_JAVADOC = "class_names_in_javadoc"

# Values for CLASS_NAMES_IN_JAVADOC
JAVADOC_FULLY_QUALIFIED_ALWAYS = 1
JAVADOC_FULLY_QUALIFIED_IF_NOT_IMPORTED = 2
JAVADOC_SHORTEN_NAMES_AND_IMPORT = 3

BOOL = "bool"
INT = "int"
PASTE = "paste"
LAYOUT = "layout"
PACKAGES = "packages"
MARKER = "marker"

KEY_TYPES: dict[str, str] = {
    ADD_UNAMBIGUOUS_IMPORTS_ON_THE_FLY: BOOL,
    OPTIMIZE_IMPORTS_ON_THE_FLY: BOOL,
    ADD_IMPORTS_ON_PASTE: PASTE,
    SHOW_IMPORT_POPUP: BOOL,
    PROJECT_OPTIMIZE_IMPORTS_ON_THE_FLY: BOOL,
    INDENT_DETECTION_ENABLED: BOOL,
    WILDCARD_CLASS_THRESHOLD: INT,
    WILDCARD_NAMES_THRESHOLD: INT,
    IMPORT_LAYOUT_ORDER: LAYOUT,
    MODULE_IMPORTS_GROUP: MARKER,
    USE_SINGLE_CLASS_IMPORTS: BOOL,
    INSERT_INNER_CLASS_IMPORTS: BOOL,
    LAYOUT_STATIC_IMPORTS_SEPARATELY: BOOL,
    PACKAGES_TO_USE_IMPORT_ON_DEMAND: PACKAGES,
    USE_FQ_CLASS_NAMES: BOOL,
    DO_NOT_SEPARATE_MODULE_IMPORTS: BOOL,
    DELETE_UNUSED_MODULE_IMPORTS: BOOL,
    CLASS_NAMES_IN_JAVADOC: INT,
}

_SEGMENT_TYPES = (
    PackageGroup, BlankLine, AllOtherImports, AllOtherStaticImports, ModuleImportsGroup,
)


def is_valid_value(key: str, value: Any) -> bool:
    """Return True if value has the type declared for key.

    Unknown keys accept any value.
    """
    kind = KEY_TYPES.get(key)
    if kind is None or kind == MARKER:
        return True
    if kind == BOOL:
        return isinstance(value, bool)
    if kind == INT:
        return isinstance(value, int) and not isinstance(value, bool)
    if kind == PASTE:
        return isinstance(value, ImportsOnPaste)
    if kind == LAYOUT:
        return isinstance(value, list) and all(isinstance(s, _SEGMENT_TYPES) for s in value)
    if kind == PACKAGES:
        return isinstance(value, list) and all(isinstance(s, PackageGroup) for s in value)
    return False
