"""Tests for the tree-sitter C/C++ tree provider."""

import pytest

from cyclogate.exceptions import SourceAccessError, UnsupportedLanguageError
from cyclogate.frontends.treesitter import TreeSitterTreeProvider, detect_language
from cyclogate.frontends.treesitter_parser import (
    TREE_SITTER_AVAILABLE,
    TreeSitterParser,
    get_supported_languages,
)
from cyclogate.traversal import ComplexityPass, iter_function_declarations

C_UNIT = b"""\
#include <stdio.h>

/* counts down */
int foo(int a) {
    if (a > 0) {
        a--;
    }
    while (a) {
        a--;
    }
    return a ? 1 : 0;
}

static void bar(void) {}

int proto(int);

char *name(void) { return 0; }

int dispatch(int k) {
    switch (k) {
    case 1: return 10;
    case 2: return 20;
    default: return 0;
    }
}
"""

CPP_UNIT = b"""\
#include <vector>

struct Widget {
    int get() const { return x ? 1 : 2; }
    int area() const;
    int x;
};

int Widget::area() const {
    std::vector<int> v;
    for (auto item : v) {
        (void)item;
    }
    return 0;
}

namespace geo {
int scale(int n) {
    for (int i = 0; i < n; ++i) {}
    do { --n; } while (n > 0);
    return n;
}
}
"""

requires_c = pytest.mark.skipif("c" not in get_supported_languages(), reason="tree-sitter-c not installed")
requires_cpp = pytest.mark.skipif("cpp" not in get_supported_languages(), reason="tree-sitter-cpp not installed")


class TestTreeSitterAvailability:
    """Test grammar availability helpers."""

    def test_availability_flag_is_bool(self):
        assert isinstance(TREE_SITTER_AVAILABLE, bool)

    def test_supported_languages_subset(self):
        assert set(get_supported_languages()) <= {"c", "cpp"}

    def test_unavailable_means_empty(self):
        if not TREE_SITTER_AVAILABLE:
            assert get_supported_languages() == []
            assert TreeSitterParser().languages == []


class TestDetectLanguage:
    """Test detect_language()."""

    @pytest.mark.parametrize(
        "path, language",
        [
            ("a.c", "c"),
            ("a.h", "c"),
            ("a.cpp", "cpp"),
            ("a.CC", "cpp"),
            ("a.hpp", "cpp"),
            ("a.rs", None),
            ("Makefile", None),
        ],
    )
    def test_extensions(self, path, language):
        assert detect_language(path) == language


class TestProviderErrors:
    """Errors that do not depend on installed grammars."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceAccessError):
            TreeSitterTreeProvider().parse_file(tmp_path / "absent.c")

    def test_unknown_extension(self):
        with pytest.raises(UnsupportedLanguageError) as exc_info:
            TreeSitterTreeProvider().parse_source(b"fn main() {}", "main.rs")
        assert exc_info.value.language == ".rs"


@requires_c
class TestCSource:
    """Scoring real C source."""

    def test_scores(self, config, channel):
        root = TreeSitterTreeProvider().parse_source(C_UNIT, "src/unit.c")
        result = ComplexityPass(channel=channel, config=config).run(root)

        assert result.report.as_dict() == {"foo": 4, "bar": 1, "name": 1, "dispatch": 2}
        assert "proto" not in result.report
        assert result.declarations_only == 1

    def test_remarks_point_at_names(self, config, channel):
        root = TreeSitterTreeProvider().parse_source(C_UNIT, "src/unit.c")
        ComplexityPass(channel=channel, config=config).run(root)
        assert channel.scores()[0] == ("src/unit.c:4:5", 4)

    def test_prototype_is_declaration_without_body(self):
        root = TreeSitterTreeProvider().parse_source(C_UNIT, "src/unit.c")
        decls = {d.name: d for d in iter_function_declarations(root)}
        assert not decls["proto"].has_body
        assert decls["foo"].has_body

    def test_header_excluded(self, config):
        root = TreeSitterTreeProvider().parse_source(C_UNIT, "include/unit.h")
        result = ComplexityPass(config=config).run(root)
        assert len(result.report) == 0

    def test_system_prefix(self, config):
        provider = TreeSitterTreeProvider(system_prefixes=("/opt/sdk",))
        root = provider.parse_source(C_UNIT, "/opt/sdk/src/unit.c")
        result = ComplexityPass(config=config).run(root)
        assert len(result.report) == 0

    def test_parse_file(self, tmp_path, config):
        path = tmp_path / "unit.c"
        path.write_bytes(C_UNIT)
        root = TreeSitterTreeProvider().parse_file(path)
        assert ComplexityPass(config=config).run(root).report.get("foo").score == 4

    def test_else_if_chain(self, config):
        source = "int f(int x) {\n" + "if (x == 0) return 0;\n" + "".join(
            f"else if (x == {i}) return {i};\n" for i in range(1, 200)
        ) + "return -1;\n}\n"
        root = TreeSitterTreeProvider().parse_source(source, "src/chain.c")
        assert ComplexityPass(config=config).run(root).report.get("f").score == 201

    def test_gnu_elvis_not_counted(self, config):
        """`a ?: b` is not a decision point, as in the clang provider."""
        root = TreeSitterTreeProvider().parse_source(b"int f(int a) { return a ?: 3; }\n", "src/elvis.c")
        assert ComplexityPass(config=config).collect(root).report.as_dict() == {"f": 1}

    def test_full_ternary_still_counted(self, config):
        root = TreeSitterTreeProvider().parse_source(b"int f(int a) { return a ? a : 3; }\n", "src/ternary.c")
        assert ComplexityPass(config=config).collect(root).report.as_dict() == {"f": 2}


    def test_macro_defined_function_uses_macro_name(self, config):
        """Without preprocessing, the declarator names the macro, not the function."""
        source = b"#define DEFINE(name) int name(void)\nDEFINE(macro_fn) { return 0; }\n"
        root = TreeSitterTreeProvider().parse_source(source, "src/macro.c")
        report = ComplexityPass(config=config).collect(root).report
        assert "DEFINE" in report
        assert "macro_fn" not in report


@requires_cpp
class TestCppSource:
    """Scoring real C++ source."""

    def test_scores(self, config):
        root = TreeSitterTreeProvider().parse_source(CPP_UNIT, "src/widget.cpp")
        result = ComplexityPass(config=config).run(root)

        # range-for is not a decision point; qualified names keep the last part
        assert result.report.as_dict() == {"get": 2, "area": 1, "scale": 3}
