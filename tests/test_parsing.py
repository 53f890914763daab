"""Tests for the parsing package - dialect selection and grammar fallback."""

import pytest

from testability_insight.exceptions import FileAccessError, ParsingError
from testability_insight.parsing import (
    Dialect,
    DialectStrategy,
    FailureKind,
    ParseAttempt,
    ParseFailure,
    TreeSitterParser,
    read_source,
)


class TestDialectStrategy:
    """Test initial dialect choice and the single fallback step."""

    def setup_method(self):
        self.strategy = DialectStrategy()

    @pytest.mark.parametrize(
        "path,dialect",
        [
            ("a.ts", Dialect.TS),
            ("a.tsx", Dialect.TS),
            ("a.jsx", Dialect.JSX),
            ("a.js", Dialect.PLAIN),
            ("a.mjs", Dialect.PLAIN),
            ("a.es6", Dialect.PLAIN),
        ],
    )
    def test_select(self, path, dialect):
        assert self.strategy.select(path) is dialect

    def test_jsx_dialect_starts_with_jsx_enabled(self):
        assert self.strategy.initial("App.jsx").jsx is True
        assert self.strategy.initial("app.js").jsx is False

    def test_missing_plugin_enables_jsx(self):
        attempt = ParseAttempt(Dialect.PLAIN)
        retry = self.strategy.fallback(attempt, ParseFailure(FailureKind.MISSING_PLUGIN, 1, 1))
        assert retry == ParseAttempt(Dialect.PLAIN, jsx=True)

    def test_unexpected_token_in_typescript_enables_jsx(self):
        attempt = ParseAttempt(Dialect.TS)
        retry = self.strategy.fallback(attempt, ParseFailure(FailureKind.UNEXPECTED_TOKEN, 1, 1))
        assert retry.jsx is True
        assert retry.grammar == "tsx"

    def test_unexpected_token_in_javascript_enables_types(self):
        attempt = ParseAttempt(Dialect.PLAIN)
        retry = self.strategy.fallback(attempt, ParseFailure(FailureKind.UNEXPECTED_TOKEN, 1, 1))
        assert retry.legacy_types is True
        assert retry.grammar == "typescript"

    @pytest.mark.parametrize(
        "attempt,grammar",
        [
            (ParseAttempt(Dialect.PLAIN), "javascript"),
            (ParseAttempt(Dialect.JSX, jsx=True), "javascript"),
            (ParseAttempt(Dialect.TS), "typescript"),
            (ParseAttempt(Dialect.TS, jsx=True), "tsx"),
            (ParseAttempt(Dialect.PLAIN, legacy_types=True), "typescript"),
            (ParseAttempt(Dialect.JSX, jsx=True, legacy_types=True), "tsx"),
        ],
    )
    def test_grammar_mapping(self, attempt, grammar):
        assert attempt.grammar == grammar


class TestTreeSitterParser:
    """Test parsing real snippets through the fallback ladder."""

    def test_plain_javascript(self, parse):
        tree = parse("const add = (a, b) => a + b;\n", "math.js")
        assert tree.root.type == "program"
        assert tree.grammar == "javascript"
        assert not tree.root.has_error

    def test_typescript(self, parse):
        tree = parse("export function id<T>(value: T): T { return value; }\n", "id.ts")
        assert tree.grammar == "typescript"

    def test_jsx_in_js_file(self, parse):
        tree = parse("const el = <div className=\"x\">{name}</div>;\n", "view.js")
        assert tree.grammar == "javascript"
        assert not tree.root.has_error

    def test_type_annotations_in_js_file_fall_back(self, parse):
        tree = parse("function greet(name: string): string { return name; }\n", "greet.js")
        assert tree.attempt.legacy_types is True
        assert tree.grammar == "typescript"

    def test_jsx_in_ts_file_falls_back_to_tsx(self, parse):
        code = "const el = <Button onClick={() => go()} />;\nexport default el;\n"
        tree = parse(code, "button.ts")
        assert tree.grammar == "tsx"
        assert not tree.root.has_error

    def test_unparseable_source_raises(self, parse):
        with pytest.raises(ParsingError) as exc_info:
            parse("function ( { = = ;\n", "broken.js")
        assert exc_info.value.filepath == "broken.js"
        assert "broken.js" in str(exc_info.value)

    def test_parsers_are_reused(self):
        parser = TreeSitterParser()
        parser.parse("let a = 1;", "a.js")
        parser.parse("let b = 2;", "b.js")
        assert list(parser._parsers) == ["javascript"]

    def test_parse_file(self, tmp_path):
        path = tmp_path / "mod.ts"
        path.write_text("export const x: number = 1;\n", encoding="utf-8")
        tree = TreeSitterParser().parse_file(str(path))
        assert tree.path == str(path)
        assert tree.grammar == "typescript"


class TestReadSource:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileAccessError):
            read_source(str(tmp_path / "nope.js"))

    def test_invalid_utf8_replaced(self, tmp_path):
        path = tmp_path / "latin.js"
        path.write_bytes(b"var s = '\xe9';\n")
        assert read_source(str(path)).startswith("var s = '")
