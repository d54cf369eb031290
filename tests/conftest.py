"""Shared test fixtures."""

import pytest

from styleguard.models import HouseStyle, PackageGroup
from styleguard.settings import keys
from styleguard.settings.provider import InMemorySettingsProvider
from styleguard.settings.store import YamlSettingsStore, default_host_settings

SAMPLE_JAVA_SOURCE = """package com.example.app;

import static org.junit.Assert.assertEquals;
import org.slf4j.Logger;
import javax.annotation.Nullable;
import java.util.List;
import com.example.util.Strings;
import java.io.File;

public class App {
}
"""

EXPECTED_JAVA_SOURCE = """package com.example.app;

import java.io.File;
import java.util.List;
import javax.annotation.Nullable;
import com.example.util.Strings;
import org.slf4j.Logger;

import static org.junit.Assert.assertEquals;

public class App {
}
"""


@pytest.fixture
def compliant_values():
    return default_host_settings()


@pytest.fixture
def noncompliant_values():
    values = default_host_settings()
    values.update({
        keys.ADD_UNAMBIGUOUS_IMPORTS_ON_THE_FLY: False,
        keys.INDENT_DETECTION_ENABLED: True,
        keys.WILDCARD_CLASS_THRESHOLD: 5,
        keys.WILDCARD_NAMES_THRESHOLD: 3,
        keys.IMPORT_LAYOUT_ORDER: [
            PackageGroup("javax"),
            PackageGroup("java"),
        ],
        keys.PACKAGES_TO_USE_IMPORT_ON_DEMAND: [PackageGroup("java.awt", with_subpackages=False)],
        keys.USE_FQ_CLASS_NAMES: True,
    })
    return values


@pytest.fixture
def compliant_provider(compliant_values):
    return InMemorySettingsProvider(compliant_values)


@pytest.fixture
def noncompliant_provider(noncompliant_values):
    return InMemorySettingsProvider(noncompliant_values)


@pytest.fixture
def house_style():
    return HouseStyle()


@pytest.fixture
def settings_file(tmp_path, noncompliant_values):
    path = tmp_path / "settings.yml"
    YamlSettingsStore.create(path, noncompliant_values)
    return path


@pytest.fixture
def compliant_settings_file(tmp_path, compliant_values):
    path = tmp_path / "compliant.yml"
    YamlSettingsStore.create(path, compliant_values)
    return path


@pytest.fixture
def java_file(tmp_path):
    path = tmp_path / "App.java"
    path.write_text(SAMPLE_JAVA_SOURCE)
    return path


@pytest.fixture
def expected_java_source():
    return EXPECTED_JAVA_SOURCE
