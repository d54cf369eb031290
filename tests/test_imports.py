"""Tests for the Java import optimizer."""

from styleguard.imports import ImportStatement, JavaImportOptimizer, parse_import
from styleguard.models import ALL_OTHER_IMPORTS, PackageGroup
from styleguard.settings.store import canonical_layout

class TestParseImport:
    def test_plain(self):
        assert parse_import("import java.util.List;") == ImportStatement("java.util.List")

    def test_static_wildcard(self):
        stmt = parse_import("import static org.junit.Assert.*;")
        assert stmt == ImportStatement("org.junit.Assert.*", static=True)

    def test_module(self):
        assert parse_import("import module java.base;").module

    def test_not_an_import(self):
        assert parse_import("public class App {") is None


class TestJavaImportOptimizer:
    def test_optimize_house_layout(self, java_file, expected_java_source):
        optimizer = JavaImportOptimizer(canonical_layout())
        assert optimizer.optimize_file(java_file) is True
        assert java_file.read_text() == expected_java_source

    def test_already_ordered(self, tmp_path, expected_java_source):
        path = tmp_path / "Ordered.java"
        path.write_text(expected_java_source)
        assert JavaImportOptimizer().optimize_file(path) is False

    def test_module_imports_first(self):
        text = "import java.util.List;\nimport module java.base;\n"
        result = JavaImportOptimizer(canonical_layout()).optimize_text(text)
        assert result == "import module java.base;\nimport java.util.List;\n"

    def test_duplicates_removed(self):
        text = "import java.util.List;\nimport java.util.List;\n"
        assert JavaImportOptimizer().optimize_text(text) == "import java.util.List;\n"

    def test_static_without_static_group(self):
        layout = [PackageGroup("java"), ALL_OTHER_IMPORTS]
        text = "import static a.B.c;\nimport java.util.Map;\n"
        result = JavaImportOptimizer(layout).optimize_text(text)
        assert result == "import java.util.Map;\nimport static a.B.c;\n"

    def test_most_specific_group_wins(self):
        layout = [PackageGroup("com"), PackageGroup("com.example"), ALL_OTHER_IMPORTS]
        text = "import com.example.A;\nimport com.other.B;\n"
        result = JavaImportOptimizer(layout).optimize_text(text)
        assert result == "import com.other.B;\nimport com.example.A;\n"

    def test_no_imports(self):
        text = "public class Empty {}\n"
        assert JavaImportOptimizer().optimize_text(text) == text
