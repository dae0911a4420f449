from io import StringIO

import pytest

from pykvconf import InvalidKvRecord, KvParser, KvYamlParser
from pykvconf.kv import parser as parser_module


class TestParseLine:
    @pytest.mark.parametrize(
        "line, expected",
        [
            ("age: 10", ("age", "10")),
            ("  name :   Bob  \n", ("name", "Bob")),
            ("url: http://example.com:8080", ("url", "http://example.com:8080")),
            ("empty:", ("empty", "")),
            ("k:v", ("k", "v")),
        ],
    )
    def test_pairs(self, line, expected):
        assert KvParser.parseline(line) == expected

    @pytest.mark.parametrize(
        "line",
        ["malformed line no colon", "", "\n", ": no key", "   : 5"],
    )
    def test_skipped(self, line):
        assert KvParser.parseline(line) is None


class TestReadStream:
    def test_last_duplicate_wins(self):
        data = KvParser.readstream(StringIO("a: 1\nb: 2\na: 3\n"))
        assert data == {"a": "3", "b": "2"}

    def test_malformed_lines_ignored(self):
        data = KvParser.readstream(
            StringIO("malformed line no colon\nname: Bob\n\n"))
        assert data == {"name": "Bob"}

    def test_fills_given_dict(self):
        ins = {"keep": "me"}
        ret = KvParser.readstream(StringIO("x: 1"), ins)
        assert ret is ins
        assert ins == {"keep": "me", "x": "1"}

    def test_windows_line_endings(self):
        data = KvParser.readstream(StringIO("a: 1\r\nb: 2\r\n"))
        assert data == {"a": "1", "b": "2"}


class TestKvParserFile:
    def test_read(self, sample_file):
        assert KvParser(sample_file).read() == {"age": "10", "name": "Bob"}

    def test_read_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            KvParser(tmp_path / "nope.txt").read()

    def test_write_lines(self, tmp_path):
        path = tmp_path / "out.txt"
        KvParser(path).write({"age": "10", "name": "Bob"})
        assert path.read_text(encoding="utf-8") == "age: 10\nname: Bob\n"

    def test_write_empty(self, tmp_path):
        path = tmp_path / "out.txt"
        KvParser(path).write({})
        assert path.read_text(encoding="utf-8") == ""

    def test_decode_fallback_uses_detected_codec(self, tmp_path, monkeypatch):
        path = tmp_path / "legacy.txt"
        path.write_bytes("name: café\n".encode("cp1252"))
        monkeypatch.setattr(
            parser_module.chardet, "detect",
            lambda _raw: {"encoding": "cp1252", "confidence": 0.99},
        )
        assert KvParser(path).read() == {"name": "café"}

    def test_decode_fallback_when_detection_unsure(self, tmp_path, monkeypatch):
        path = tmp_path / "legacy.txt"
        path.write_bytes(b"a: 1\nname: caf\xe9\n")
        monkeypatch.setattr(
            parser_module.chardet, "detect",
            lambda _raw: {"encoding": None, "confidence": 0.0},
        )
        # utf-8 fails again, so latin-1 takes it.
        assert KvParser(path).read() == {"a": "1", "name": "café"}

    def test_str(self, tmp_path):
        assert str(tmp_path / "x.txt") in str(KvParser(tmp_path / "x.txt"))


class TestKvYamlParser:
    def test_write_then_read(self, tmp_path):
        path = tmp_path / "conf.yaml"
        pairs = {"age": "10", "name": "Bob", "flag": "true", "blank": ""}
        KvYamlParser(path).write(pairs)
        assert KvYamlParser(path).read() == pairs

    def test_scalars_are_stringified(self, tmp_path):
        path = tmp_path / "conf.yaml"
        path.write_text("port: 8080\nratio: 0.5\nnothing:\n", encoding="utf-8")
        assert KvYamlParser(path).read() == {
            "port": "8080", "ratio": "0.5", "nothing": ""}

    def test_empty_document(self, tmp_path):
        path = tmp_path / "conf.yaml"
        path.write_text("", encoding="utf-8")
        assert KvYamlParser(path).read() == {}

    def test_nested_rejected(self, tmp_path):
        path = tmp_path / "conf.yaml"
        path.write_text("db:\n  host: localhost\n", encoding="utf-8")
        with pytest.raises(InvalidKvRecord):
            KvYamlParser(path).read()

    def test_sequence_document_rejected(self, tmp_path):
        path = tmp_path / "conf.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(InvalidKvRecord):
            KvYamlParser(path).read()
