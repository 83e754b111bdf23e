"""Tests for the shift-reduce automaton and the XMLMinus entry point."""

import unittest

from xmlminus import (
    PRODUCTIONS,
    DuplicateAttributeError,
    Nonterminal,
    Parser,
    TagMismatchError,
    XMLMinus,
    XMLSyntaxError,
    parse,
    tokenize,
    validate,
)
from xmlminus.context import ParserContext


def run_to_state(document, target):
    """Step a fresh parse of ``document`` until ``target`` is the current state."""
    parser = Parser()
    context = ParserContext(tokenize(document))
    while context.current_state != target:
        assert not parser.step(context)
    return context


def run_to_accept(document):
    parser = Parser()
    context = ParserContext(tokenize(document))
    while not parser.step(context):
        pass
    return context


class TestAccepted(unittest.TestCase):
    def test_empty_element(self):
        derivation = validate("<a></a>")
        assert derivation.accepted
        assert [step.label for step in derivation] == ["6.1", "11.1", "24.1", "15.1", "8.1", "5.1", "1.1"]
        assert [p.index for p in derivation.productions] == [5, 10, 11, 6, 3, 2, 1]

    def test_self_closing_element(self):
        derivation = validate("<a/>")
        assert derivation.accepted
        assert [step.label for step in derivation] == ["6.3", "9.1", "8.1", "5.1", "1.1"]
        assert [p.index for p in derivation.productions] == [5, 7, 3, 2, 1]

    def test_tag_stack_empty_after_accept(self):
        for document in ("<a></a>", "<a/>", "<a><b/><c>x</c></a>"):
            context = run_to_accept(document)
            assert context.tag_names == []
            assert context.attribute_names == set()

    def test_same_attribute_name_in_different_tags(self):
        assert validate('<a x="1"><b x="2"></b></a>').accepted

    def test_data_interleaved_with_elements(self):
        doc = XMLMinus("<a>text<b></b>more</a>")
        assert doc.accepted
        assert [str(t) for t in doc.tokens if t.kind.value == "DATA"] == ["DATA text", "DATA more"]
        assert sum(1 for p in doc.derivation.productions if p.index == 9) == 2

    def test_comments_and_whitespace(self):
        document = """
        <!-- leading comment -->
        <catalog kind="books">
            <book id='1' lang="en">A  title</book>
            <!-- nested comment -->
            <book id="2"/>
        </catalog>
        """
        assert validate(document).accepted

    def test_attribute_reductions(self):
        derivation = validate("<a x='1' y='2'/>")
        attribute_steps = [step for step in derivation if step.production.lhs is Nonterminal.ATTRIBUTE]
        assert [step.production.index for step in attribute_steps] == [5, 4, 4]
        assert [step.label for step in attribute_steps] == ["6.2", "14.2", "14.3"]

    def test_deep_nesting_has_no_recursion_limit(self):
        depth = 5000
        document = "<e>" * depth + "</e>" * depth
        assert validate(document).accepted

    def test_rightmost_starts_from_document(self):
        derivation = validate("<a><b/></a>")
        rightmost = derivation.rightmost()
        assert rightmost[0].production is PRODUCTIONS[1]
        assert rightmost[-1].production is PRODUCTIONS[5]

    def test_augmented_rule_not_recorded(self):
        derivation = validate("<a/>")
        assert PRODUCTIONS[0] not in derivation.productions

    def test_sequence_numbers(self):
        derivation = validate("<a><b/></a>")
        assert [step.sequence for step in derivation] == list(range(1, len(derivation) + 1))

    def test_repeated_parses_are_identical(self):
        document = "<a x='1'>t <b y=\"2\"/> u<c></c></a>"
        assert validate(document) == validate(document)
        parser = Parser()
        tokens = tokenize(document)
        assert parser.parse(tokens) == parser.parse(tokens)

    def test_to_text(self):
        assert XMLMinus("<a/>").to_text() == (
            "6.3 attribute ::= EPSILON\n"
            "9.1 elementSuffix ::= />\n"
            "8.1 elementPrefix ::= NAME attribute elementSuffix\n"
            "5.1 element ::= < elementPrefix\n"
            "1.1 document ::= element"
        )

    def test_bytes_input(self):
        doc = XMLMinus(b"\xef\xbb\xbf<a>caf\xc3\xa9</a>")
        assert doc.accepted
        assert doc.encoding == "utf-8"
        assert doc.tokens[3].lexeme == "café"


class TestStructuralErrors(unittest.TestCase):
    def test_tag_mismatch(self):
        with self.assertRaises(TagMismatchError) as ctx:
            validate("<a></b>")
        error = ctx.exception
        assert (error.expected, error.found) == ("a", "b")
        assert "expected 'a' but found 'b'" in str(error)
        assert (error.line, error.column) == (1, 6)

    def test_tag_match_is_case_sensitive(self):
        with self.assertRaises(TagMismatchError):
            validate("<a></A>")

    def test_nested_mismatch(self):
        with self.assertRaises(TagMismatchError) as ctx:
            validate("<a><b></a></b>")
        assert (ctx.exception.expected, ctx.exception.found) == ("b", "a")

    def test_duplicate_attribute(self):
        with self.assertRaises(DuplicateAttributeError) as ctx:
            validate('<a x="1" x="2"></a>')
        assert ctx.exception.name == "x"
        assert ctx.exception.code == "duplicate-attribute"
        assert (ctx.exception.line, ctx.exception.column) == (1, 10)

    def test_duplicate_attribute_in_nested_tag(self):
        with self.assertRaises(DuplicateAttributeError):
            validate("<a x='1'><b y='1' y='2'/></a>")

    def test_attribute_set_cleared_after_start_tag(self):
        context = run_to_state('<a x="1"><b x="2"/></a>', 11)
        assert context.attribute_names == set()

    def test_attribute_set_collects_names(self):
        context = run_to_state("<a x='1' y='2'>t</a>", 11)
        assert context.attribute_names == set()
        context = run_to_state("<a x='1' y='2'>t</a>", 13)
        assert context.attribute_names == {"x"}

    def test_tag_stack_tracks_nesting(self):
        context = run_to_state("<a><b>t</b></a>", 27)
        assert context.tag_names == ["a", "b"]


class TestSyntaxErrors(unittest.TestCase):
    def assert_syntax_error(self, document):
        with self.assertRaises(XMLSyntaxError) as ctx:
            validate(document)
        return ctx.exception

    def test_missing_end_tag(self):
        error = self.assert_syntax_error("<a>")
        assert error.code == "unexpected-token"
        assert "END" in error.message

    def test_two_root_elements(self):
        error = self.assert_syntax_error("<a/><b/>")
        assert (error.line, error.column) == (1, 5)

    def test_end_tag_first(self):
        self.assert_syntax_error("</a>")

    def test_attribute_without_value(self):
        self.assert_syntax_error("<a x></a>")

    def test_data_outside_root(self):
        self.assert_syntax_error("<a></a>text")

    def test_no_tokens(self):
        with self.assertRaises(XMLSyntaxError):
            parse([])

    def test_whitespace_only_document(self):
        self.assert_syntax_error("   \n  ")

    def test_expected_tokens_listed(self):
        error = self.assert_syntax_error("<a x=y/>")
        assert "expected STRING" in error.message

    def test_error_renders_as_builtin_syntax_error(self):
        error = self.assert_syntax_error("<a>\n<b x/></a>")
        exc = error.as_exception()
        assert isinstance(exc, SyntaxError)
        assert (exc.lineno, exc.offset) == (2, 5)
        assert exc.text == "<b x/></a>"

        with self.assertRaises(TagMismatchError) as ctx:
            XMLMinus("<a>\n</b>")
        exc = ctx.exception.as_exception()
        assert exc.filename == "<xml-->"
        assert exc.lineno == 2

    def test_bare_parse_errors_have_no_source(self):
        with self.assertRaises(XMLSyntaxError) as ctx:
            parse(tokenize("<a>"))
        exc = ctx.exception.as_exception()
        assert exc.lineno is None


if __name__ == "__main__":
    unittest.main()
