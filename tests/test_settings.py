"""Tests for settings providers and the YAML store."""

import shutil

import pytest
import yaml

from styleguard.errors import SettingsFormatError, SettingWriteError, UnsupportedSettingError
from styleguard.models import (
    ALL_OTHER_STATIC_IMPORTS,
    MODULE_IMPORTS,
    ImportsOnPaste,
    PackageGroup,
)
from styleguard.settings import keys
from styleguard.settings.provider import (
    InMemorySettingsProvider,
    SettingsView,
    SettingsWriter,
)
from styleguard.settings.store import (
    YamlSettingsStore,
    canonical_layout,
    readonly_from_data,
    segment_from_data,
    settings_from_data,
    value_from_data,
)


class TestInMemorySettingsProvider:
    def test_capability_discovery(self):
        provider = InMemorySettingsProvider({keys.USE_FQ_CLASS_NAMES: False})
        assert provider.has_setting(keys.USE_FQ_CLASS_NAMES)
        assert not provider.has_setting(keys.INDENT_DETECTION_ENABLED)

    def test_get_unsupported_raises(self):
        provider = InMemorySettingsProvider({})
        with pytest.raises(UnsupportedSettingError):
            provider.get_setting(keys.INDENT_DETECTION_ENABLED)

    def test_write_requires_scope(self):
        provider = InMemorySettingsProvider({keys.USE_FQ_CLASS_NAMES: True})
        with pytest.raises(SettingWriteError):
            provider.set_setting(keys.USE_FQ_CLASS_NAMES, False)
        with provider.write_scope():
            provider.set_setting(keys.USE_FQ_CLASS_NAMES, False)
        assert provider.get_setting(keys.USE_FQ_CLASS_NAMES) is False

    def test_readonly_rejects_write(self):
        provider = InMemorySettingsProvider({keys.USE_FQ_CLASS_NAMES: True},
                                            readonly=[keys.USE_FQ_CLASS_NAMES])
        with provider.write_scope(), pytest.raises(SettingWriteError):
            provider.set_setting(keys.USE_FQ_CLASS_NAMES, False)

    def test_type_validation(self):
        provider = InMemorySettingsProvider({keys.WILDCARD_CLASS_THRESHOLD: 5})
        with provider.write_scope():
            with pytest.raises(SettingWriteError):
                provider.set_setting(keys.WILDCARD_CLASS_THRESHOLD, "99")
            with pytest.raises(SettingWriteError):
                provider.set_setting(keys.WILDCARD_CLASS_THRESHOLD, True)

    def test_reads_are_copies(self):
        provider = InMemorySettingsProvider({keys.IMPORT_LAYOUT_ORDER: canonical_layout()})
        layout = provider.get_setting(keys.IMPORT_LAYOUT_ORDER)
        layout.clear()
        assert provider.get_setting(keys.IMPORT_LAYOUT_ORDER) == canonical_layout()

    def test_scope_is_reentrant(self):
        provider = InMemorySettingsProvider({})
        with provider.write_scope():
            with provider.write_scope():
                assert provider.in_write_scope
            assert provider.in_write_scope
        assert not provider.in_write_scope

    def test_scope_released_on_error(self):
        provider = InMemorySettingsProvider({})
        with pytest.raises(RuntimeError):
            with provider.write_scope():
                raise RuntimeError("boom")
        assert not provider.in_write_scope


class TestViewAndWriter:
    def test_view_default_for_unsupported(self):
        view = SettingsView(InMemorySettingsProvider({}))
        assert view.get(keys.USE_FQ_CLASS_NAMES, False) is False
        assert not view.supports(keys.USE_FQ_CLASS_NAMES)

    def test_writer_skips_unsupported(self):
        provider = InMemorySettingsProvider({keys.USE_FQ_CLASS_NAMES: True})
        writer = SettingsWriter(provider)
        with provider.write_scope():
            assert writer.set(keys.USE_FQ_CLASS_NAMES, False) is True
            assert writer.set(keys.INDENT_DETECTION_ENABLED, False) is False
            assert writer.set(keys.INDENT_DETECTION_ENABLED, False) is False
        assert writer.skipped == [keys.INDENT_DETECTION_ENABLED]


class TestCodec:
    def test_named_segments(self):
        assert segment_from_data("module_imports") is MODULE_IMPORTS
        assert segment_from_data("all_other_static_imports") is ALL_OTHER_STATIC_IMPORTS

    def test_package_segment_defaults(self):
        assert segment_from_data({"package": "java"}) == PackageGroup("java", True, False)

    def test_unknown_segment(self):
        with pytest.raises(SettingsFormatError):
            segment_from_data("imports_of_the_future")

    def test_paste_choice(self):
        assert value_from_data(keys.ADD_IMPORTS_ON_PASTE, "ALWAYS") == ImportsOnPaste.ALWAYS
        with pytest.raises(SettingsFormatError):
            value_from_data(keys.ADD_IMPORTS_ON_PASTE, "sometimes")

    def test_bool_type_checked(self):
        with pytest.raises(SettingsFormatError):
            value_from_data(keys.USE_FQ_CLASS_NAMES, "no")

    def test_wildcard_exceptions_reject_blank_lines(self):
        with pytest.raises(SettingsFormatError):
            value_from_data(keys.PACKAGES_TO_USE_IMPORT_ON_DEMAND, ["blank_line"])

    @pytest.mark.parametrize("flags", [
        {"with_subpackages": "false"},
        {"static": "yes"},
        {"with_subpackages": 0},
    ])
    def test_package_segment_flags_must_be_bool(self, flags):
        with pytest.raises(SettingsFormatError):
            segment_from_data({"package": "java", **flags})

    def test_package_segment_explicit_flags(self):
        data = {"package": "org.junit", "with_subpackages": False, "static": True}
        assert segment_from_data(data) == PackageGroup("org.junit", False, True)

    def test_false_marker_means_unsupported(self):
        values = settings_from_data({
            keys.MODULE_IMPORTS_GROUP: False,
            keys.USE_FQ_CLASS_NAMES: False,
        })
        assert values == {keys.USE_FQ_CLASS_NAMES: False}

    @pytest.mark.parametrize("marker", ["false", 0, None])
    def test_marker_must_be_true(self, marker):
        with pytest.raises(SettingsFormatError):
            settings_from_data({keys.MODULE_IMPORTS_GROUP: marker})

    def test_readonly_forms(self):
        assert readonly_from_data(None) == []
        assert readonly_from_data("use_fq_class_names") == ["use_fq_class_names"]
        assert readonly_from_data(["a", "b"]) == ["a", "b"]

    @pytest.mark.parametrize("readonly", [5, {"use_fq_class_names": True}, ["a", 1]])
    def test_readonly_rejects_non_names(self, readonly):
        with pytest.raises(SettingsFormatError):
            readonly_from_data(readonly)


class TestYamlSettingsStore:
    def test_load(self, settings_file):
        store = YamlSettingsStore(settings_file)
        assert store.get_setting(keys.WILDCARD_CLASS_THRESHOLD) == 5
        assert store.get_setting(keys.IMPORT_LAYOUT_ORDER) == [
            PackageGroup("javax"), PackageGroup("java"),
        ]
        assert store.has_setting(keys.MODULE_IMPORTS_GROUP)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            YamlSettingsStore(tmp_path / "nope.yml")

    def test_absent_keys_are_unsupported(self, tmp_path):
        path = tmp_path / "old_host.yml"
        path.write_text("settings:\n  use_single_class_imports: true\n")
        store = YamlSettingsStore(path)
        assert store.setting_names() == [keys.USE_SINGLE_CLASS_IMPORTS]

    def test_empty_document(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert YamlSettingsStore(path).setting_names() == []

    def test_malformed_document(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(SettingsFormatError):
            YamlSettingsStore(path)

    def test_commit_on_outer_scope_exit(self, settings_file):
        store = YamlSettingsStore(settings_file)
        with store.write_scope():
            with store.write_scope():
                store.set_setting(keys.WILDCARD_CLASS_THRESHOLD, 99)
            on_disk = yaml.safe_load(settings_file.read_text())
            assert on_disk["settings"][keys.WILDCARD_CLASS_THRESHOLD] == 5
        on_disk = yaml.safe_load(settings_file.read_text())
        assert on_disk["settings"][keys.WILDCARD_CLASS_THRESHOLD] == 99

    def test_readonly_from_document(self, tmp_path):
        path = tmp_path / "locked.yml"
        path.write_text(
            "settings:\n  use_fq_class_names: true\nreadonly:\n  - use_fq_class_names\n")
        store = YamlSettingsStore(path)
        with store.write_scope(), pytest.raises(SettingWriteError):
            store.set_setting(keys.USE_FQ_CLASS_NAMES, False)

    def test_single_readonly_key(self, tmp_path):
        path = tmp_path / "locked.yml"
        path.write_text(
            "settings:\n  use_fq_class_names: true\nreadonly: use_fq_class_names\n")
        store = YamlSettingsStore(path)
        with store.write_scope(), pytest.raises(SettingWriteError):
            store.set_setting(keys.USE_FQ_CLASS_NAMES, False)

    def test_malformed_readonly(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("settings:\n  use_fq_class_names: true\nreadonly: 5\n")
        with pytest.raises(SettingsFormatError):
            YamlSettingsStore(path)

    def test_module_marker_false_in_document(self, tmp_path):
        path = tmp_path / "old_host.yml"
        path.write_text("settings:\n  module_imports_group: false\n")
        assert not YamlSettingsStore(path).has_setting(keys.MODULE_IMPORTS_GROUP)

    def test_commit_failure_raises_write_error(self, tmp_path, compliant_values):
        path = tmp_path / "host" / "settings.yml"
        store = YamlSettingsStore.create(path, compliant_values)
        shutil.rmtree(path.parent)
        with pytest.raises(SettingWriteError):
            with store.write_scope():
                store.set_setting(keys.USE_FQ_CLASS_NAMES, False)
        assert not store.in_write_scope
