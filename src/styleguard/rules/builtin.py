"""Built-in house-style rules."""

from __future__ import annotations

import logging
from typing import Any

from styleguard.errors import SettingWriteError
from styleguard.models import (
    ImportsOnPaste,
    LayoutSegment,
    ModuleImportsGroup,
    PackageGroup,
    Rule,
    describe_layout,
)
from styleguard.settings import keys
from styleguard.settings.provider import SettingsView, SettingsWriter
from styleguard.settings.store import canonical_layout

logger = logging.getLogger(__name__)

DEFAULT_WILDCARD_THRESHOLD = 99

# Written on every fix when the host supports them; no rule checks these.
COMPANION_WRITES: dict[str, Any] = {
    keys.SHOW_IMPORT_POPUP: True,
    keys.DO_NOT_SEPARATE_MODULE_IMPORTS: True,
    keys.DELETE_UNUSED_MODULE_IMPORTS: False,
    keys.CLASS_NAMES_IN_JAVADOC: keys.JAVADOC_FULLY_QUALIFIED_IF_NOT_IMPORTED,
}


def module_imports_supported(view: SettingsView) -> bool:
    """True if the host has a module-import group for the import layout."""
    return view.supports(keys.MODULE_IMPORTS_GROUP)


def _is_group(segment: LayoutSegment, package: str) -> bool:
    return (
        isinstance(segment, PackageGroup)
        and segment.package == package
        and not segment.static
        and segment.with_subpackages
    )


# -- predicates --------------------------------------------------------------


def auto_import_enabled(view: SettingsView) -> bool:
    return (
        view.get(keys.ADD_UNAMBIGUOUS_IMPORTS_ON_THE_FLY, True) is True
        and view.get(keys.OPTIMIZE_IMPORTS_ON_THE_FLY, True) is True
        and view.get(keys.ADD_IMPORTS_ON_PASTE, ImportsOnPaste.ALWAYS) == ImportsOnPaste.ALWAYS
    )


def project_auto_import_enabled(view: SettingsView) -> bool:
    return view.get(keys.PROJECT_OPTIMIZE_IMPORTS_ON_THE_FLY, True) is True


def indent_detection_disabled(view: SettingsView) -> bool:
    return view.get(keys.INDENT_DETECTION_ENABLED, False) is False


def _no_wildcard_imports(threshold: int):
    def predicate(view: SettingsView) -> bool:
        class_count = view.get(keys.WILDCARD_CLASS_THRESHOLD, threshold)
        names_count = view.get(keys.WILDCARD_NAMES_THRESHOLD, threshold)
        return class_count >= threshold and names_count >= threshold
    return predicate


def import_layout_order(view: SettingsView) -> bool:
    if not view.supports(keys.IMPORT_LAYOUT_ORDER):
        return True
    layout = view.get(keys.IMPORT_LAYOUT_ORDER) or []
    if layout and isinstance(layout[0], ModuleImportsGroup):
        layout = layout[1:]
    if len(layout) < 2:
        logger.debug("Layout too short for java/javax: %s", describe_layout(layout))
        return False
    return _is_group(layout[0], "java") and _is_group(layout[1], "javax")


def module_imports_first(view: SettingsView) -> bool:
    if not module_imports_supported(view) or not view.supports(keys.IMPORT_LAYOUT_ORDER):
        return True
    layout = view.get(keys.IMPORT_LAYOUT_ORDER) or []
    return bool(layout) and isinstance(layout[0], ModuleImportsGroup)


def _flag_is(key: str, expected: bool):
    def predicate(view: SettingsView) -> bool:
        return view.get(key, expected) is expected
    return predicate


def no_package_wildcard_exceptions(view: SettingsView) -> bool:
    return not view.get(keys.PACKAGES_TO_USE_IMPORT_ON_DEMAND, [])


# -- fixes -------------------------------------------------------------------


def fix_auto_import(writer: SettingsWriter) -> None:
    writer.set(keys.ADD_UNAMBIGUOUS_IMPORTS_ON_THE_FLY, True)
    writer.set(keys.OPTIMIZE_IMPORTS_ON_THE_FLY, True)
    writer.set(keys.ADD_IMPORTS_ON_PASTE, ImportsOnPaste.ALWAYS)


def fix_import_layout(writer: SettingsWriter) -> None:
    """Rewrite the layout once; serves both layout rules."""
    layout = canonical_layout(module_imports=module_imports_supported(writer))
    writer.set(keys.IMPORT_LAYOUT_ORDER, layout)


def _set_values(*pairs: tuple[str, Any]):
    def fix(writer: SettingsWriter) -> None:
        for key, value in pairs:
            writer.set(key, value)
    return fix


def apply_companion_writes(writer: SettingsWriter) -> None:
    for key, value in COMPANION_WRITES.items():
        try:
            writer.set(key, value)
        except SettingWriteError as e:
            logger.warning("Companion setting %s not written: %s", key, e)


def build_house_rules(wildcard_threshold: int = DEFAULT_WILDCARD_THRESHOLD) -> list[Rule]:
    """Build the house rules in report order."""
    return [
        Rule(
            name="auto_import_enabled",
            title="Auto import (application level) is not enabled",
            description="Add unambiguous imports and optimize imports on the fly, "
                        "and always insert imports on paste.",
            predicate=auto_import_enabled,
            fix=fix_auto_import,
            settings=(keys.ADD_UNAMBIGUOUS_IMPORTS_ON_THE_FLY,
                      keys.OPTIMIZE_IMPORTS_ON_THE_FLY, keys.ADD_IMPORTS_ON_PASTE),
        ),
        Rule(
            name="project_auto_import_enabled",
            title="Optimize imports on the fly (project level) is not enabled",
            predicate=project_auto_import_enabled,
            fix=_set_values((keys.PROJECT_OPTIMIZE_IMPORTS_ON_THE_FLY, True)),
            settings=(keys.PROJECT_OPTIMIZE_IMPORTS_ON_THE_FLY,),
        ),
        Rule(
            name="indent_detection_disabled",
            title="Indent detection is not disabled",
            predicate=indent_detection_disabled,
            fix=_set_values((keys.INDENT_DETECTION_ENABLED, False)),
            settings=(keys.INDENT_DETECTION_ENABLED,),
        ),
        Rule(
            name="no_wildcard_imports",
            title=f"Wildcard imports are allowed (class/names count < {wildcard_threshold})",
            predicate=_no_wildcard_imports(wildcard_threshold),
            fix=_set_values((keys.WILDCARD_CLASS_THRESHOLD, wildcard_threshold),
                            (keys.WILDCARD_NAMES_THRESHOLD, wildcard_threshold)),
            settings=(keys.WILDCARD_CLASS_THRESHOLD, keys.WILDCARD_NAMES_THRESHOLD),
        ),
        Rule(
            name="import_layout_order",
            title="Import layout order is not java.*, javax.*, other, blank, static",
            predicate=import_layout_order,
            fix=fix_import_layout,
            settings=(keys.IMPORT_LAYOUT_ORDER,),
        ),
        Rule(
            name="module_imports_first",
            title="Module imports are not placed first",
            predicate=module_imports_first,
            fix=fix_import_layout,
            settings=(keys.IMPORT_LAYOUT_ORDER, keys.MODULE_IMPORTS_GROUP),
        ),
        Rule(
            name="use_single_class_imports",
            title="Use single class imports is not enabled",
            predicate=_flag_is(keys.USE_SINGLE_CLASS_IMPORTS, True),
            fix=_set_values((keys.USE_SINGLE_CLASS_IMPORTS, True)),
            settings=(keys.USE_SINGLE_CLASS_IMPORTS,),
        ),
        Rule(
            name="insert_inner_class_imports",
            title="Insert inner class imports is not enabled",
            predicate=_flag_is(keys.INSERT_INNER_CLASS_IMPORTS, True),
            fix=_set_values((keys.INSERT_INNER_CLASS_IMPORTS, True)),
            settings=(keys.INSERT_INNER_CLASS_IMPORTS,),
        ),
        Rule(
            name="layout_static_imports_separately",
            title="Layout static imports separately is not enabled",
            predicate=_flag_is(keys.LAYOUT_STATIC_IMPORTS_SEPARATELY, True),
            fix=_set_values((keys.LAYOUT_STATIC_IMPORTS_SEPARATELY, True)),
            settings=(keys.LAYOUT_STATIC_IMPORTS_SEPARATELY,),
        ),
        Rule(
            name="no_package_wildcard_exceptions",
            title="Packages to use import with '*' is not empty",
            predicate=no_package_wildcard_exceptions,
            fix=_set_values((keys.PACKAGES_TO_USE_IMPORT_ON_DEMAND, [])),
            settings=(keys.PACKAGES_TO_USE_IMPORT_ON_DEMAND,),
        ),
        Rule(
            name="no_fully_qualified_class_names",
            title="Use fully qualified class names is not disabled",
            predicate=_flag_is(keys.USE_FQ_CLASS_NAMES, False),
            fix=_set_values((keys.USE_FQ_CLASS_NAMES, False)),
            settings=(keys.USE_FQ_CLASS_NAMES,),
        ),
    ]


RULE_NAMES = [rule.name for rule in build_house_rules()]
