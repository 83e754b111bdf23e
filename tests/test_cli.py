"""Tests for the xmlminus command-line interface."""

import io
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

from xmlminus.__main__ import main


class TestCLI(unittest.TestCase):
    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmpdir.name)

    def tearDown(self):
        self._tmpdir.cleanup()

    def write(self, text, name="input.xml"):
        path = self.tmp / name
        path.write_bytes(text.encode("utf-8") if isinstance(text, str) else text)
        return str(path)

    def run_main(self, argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        code = 0
        with redirect_stdout(stdout), redirect_stderr(stderr):
            try:
                main(argv)
            except SystemExit as e:
                code = e.code
        return code, stdout.getvalue(), stderr.getvalue()

    def test_prints_derivation(self):
        code, out, err = self.run_main([self.write("<a/>")])
        assert code == 0
        assert err == ""
        assert out == (
            "6.3 attribute ::= EPSILON\n"
            "9.1 elementSuffix ::= />\n"
            "8.1 elementPrefix ::= NAME attribute elementSuffix\n"
            "5.1 element ::= < elementPrefix\n"
            "1.1 document ::= element\n"
            "\n"
            "Document parsed successfully!\n"
        )

    def test_rightmost(self):
        code, out, _ = self.run_main([self.write("<a/>"), "--rightmost"])
        assert code == 0
        assert out.startswith("1.1 document ::= element\n5.1 element ::= < elementPrefix\n")

    def test_tokens(self):
        code, out, _ = self.run_main([self.write("<a x='1'/>"), "--tokens"])
        assert code == 0
        assert out == "OPEN <\nNAME a\nNAME x\nASSIGN =\nSTRING '1'\nSLGT />\n"

    def test_tokens_and_rightmost_conflict(self):
        code, _, err = self.run_main([self.write("<a/>"), "--tokens", "--rightmost"])
        assert code == 2
        assert "not allowed with" in err

    def test_grammar(self):
        code, out, _ = self.run_main(["--grammar"])
        assert code == 0
        assert out.startswith("S' ::= document\ndocument ::= element\n")
        assert "endTag ::= </ NAME >" in out

    def test_table(self):
        code, out, _ = self.run_main(["--table"])
        assert code == 0
        lines = out.splitlines()
        assert lines[0].startswith("state | NAME")
        assert len(lines) == 2 + 33

    def test_reads_stdin(self):
        stdin = io.TextIOWrapper(io.BytesIO(b"<a></a>"))
        with mock.patch("sys.stdin", stdin):
            code, out, _ = self.run_main(["-"])
        assert code == 0
        assert out.startswith("6.1 attribute ::= EPSILON\n")

    def test_encoding_option(self):
        path = self.write("<a>café</a>".encode("latin-1"))
        code, out, _ = self.run_main([path, "--encoding", "latin-1", "--tokens"])
        assert code == 0
        assert "DATA café" in out

    def test_tag_mismatch_exit_code(self):
        code, out, err = self.run_main([self.write("<a></b>")])
        assert code == 2
        assert out == ""
        assert "Error - (1,6): end-tag-mismatch" in err
        assert err.endswith("Parsing terminated...\n")

    def test_duplicate_attribute_exit_code(self):
        code, _, err = self.run_main([self.write("<a x='1' x='2'/>")])
        assert code == 3
        assert "duplicate-attribute" in err

    def test_syntax_error_exit_code(self):
        code, _, err = self.run_main([self.write("<a>")])
        assert code == 1
        assert "unexpected-token" in err

    def test_lexical_error_exit_code(self):
        code, _, err = self.run_main([self.write("")])
        assert code == 1
        assert "empty-document" in err

    def test_strict_mode(self):
        path = self.write('<a t="&foo;"/>')
        assert self.run_main([path])[0] == 1
        code, _, err = self.run_main([path, "--strict"])
        assert code == 1
        assert "unexpected-character" in err

    def test_missing_file(self):
        code, _, err = self.run_main([str(self.tmp / "missing.xml")])
        assert code == 1
        assert "missing.xml" in err

    def test_no_arguments_prints_help(self):
        code, out, err = self.run_main([])
        assert code == 1
        assert out == ""
        assert "usage: xmlminus" in err

    def test_version(self):
        code, out, _ = self.run_main(["--version"])
        assert code == 0
        assert out.startswith("xmlminus ")


if __name__ == "__main__":
    unittest.main()
