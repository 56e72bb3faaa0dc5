"""
Tests for loading from streams and files, saving, and exporting.
"""

import io
import json

import pytest
import yaml

from inidoc import (
    GIT, IniFileParser, dump, load, load_file, load_string, new_file,
    to_json, to_yaml
)
from tests.conftest import COMPLEX


class TestLoad:
    """Streams and strings."""

    def test_load_text_stream(self):
        doc = load(io.StringIO('[s]\nk = v\n'))
        assert doc.get_key('s.k') == 'v'

    def test_load_byte_stream(self):
        doc = load(io.BytesIO('[s]\nk = é\n'.encode('utf-8')))
        assert doc.get_key('s.k') == 'é'
        assert doc.encoding == 'utf-8'

    def test_bad_stream_raises(self):
        with pytest.raises(ValueError):
            load(io.StringIO('bad'))


class TestFiles:
    """Files on disk."""

    def test_missing_file_gives_empty_document(self, tmp_path):
        path = str(tmp_path / 'nonexistent.ini')
        doc = load_file(path)
        assert doc.filename == path
        assert str(doc) == '\n'

    def test_first_save_creates_file(self, tmp_path):
        path = tmp_path / 'new.ini'
        doc = load_file(str(path))
        doc.set_key('core.editor', 'vim')
        doc.save()
        assert path.read_text(encoding='utf-8') == '[core]\n\teditor=vim\n'

    def test_save_without_filename(self):
        doc = new_file()
        doc.set_key('k1', 'v1')
        with pytest.raises(OSError):
            doc.save()
        with pytest.raises(OSError):
            doc.write('')

    def test_round_trip_on_disk(self, tmp_path):
        path = tmp_path / 'complex.ini'
        path.write_text(COMPLEX, encoding='utf-8')
        doc = load_file(str(path))
        doc.save()
        assert path.read_text(encoding='utf-8') == COMPLEX + '\n'

    def test_crlf_survives_save(self, tmp_path):
        path = tmp_path / 'crlf.ini'
        path.write_bytes(b'a = 1\r\n[s]\r\nb = 2\r\n')
        doc = load_file(str(path))
        doc.set_key('s.b', '3')
        doc.save()
        assert path.read_bytes() == b'a = 1\r\n[s]\r\nb = 3\r\n'

    def test_maps_through_disk(self, tmp_path):
        path = str(tmp_path / 'git.ini')
        doc = new_file(dialect=GIT)
        doc.filename = path
        doc.set_map({
            '': {'k0': 'v0'},
            'sect0': {'k1': 'v1', 'k2': 'v2'},
            'sect0.sub1': {'k3': 'v3'},
        })
        doc.save()

        expected = {
            'k0': 'v0',
            'sect0.k1': 'v1',
            'sect0.k2': 'v2',
            'sect0.sub1.k3': 'v3',
        }
        loaded = load_file(path, dialect=GIT)
        for key, value in expected.items():
            assert loaded.get_key(key) == value
        assert loaded.get_map_flat() == expected

        rebuilt = new_file(dialect=GIT)
        rebuilt.set_map_flat(expected)
        for key, value in expected.items():
            assert rebuilt.get_key(key) == value

    def test_explicit_encoding(self, tmp_path):
        path = tmp_path / 'gbk.ini'
        path.write_bytes('[节]\n键 = 值\n'.encode('gbk'))
        doc = load_file(str(path), encoding='gbk')
        assert doc.get_key('节.键') == '值'
        doc.save()
        assert path.read_bytes() == '[节]\n键 = 值\n'.encode('gbk')

    def test_undecodable_utf8_falls_back(self, tmp_path):
        path = tmp_path / 'latin.ini'
        raw = 'name = café\n'.encode('latin-1')
        path.write_bytes(raw)
        doc = load_file(str(path))
        assert doc.encoding != 'utf-8'
        assert doc.get_key('name') == 'café'
        doc.save()
        assert path.read_bytes() == raw

    def test_file_parser_handler(self, tmp_path):
        path = str(tmp_path / 'handler.ini')
        handler = IniFileParser(path)
        doc = handler.read()
        doc.set_key('k', 'v')
        handler.write(doc)
        assert handler.read().get_key('k') == 'v'
        assert str(handler).startswith('INI file: ')


class TestExport:
    """JSON and YAML dumps of the document values."""

    @pytest.fixture
    def doc(self):
        return load_string('k0 = v0\n[s]\nk1 = v1 ; c\n[ 毚饯 ]\n䥵 = 覎\n')

    def test_to_json(self, doc):
        assert json.loads(to_json(doc)) == doc.get_map()
        assert json.loads(to_json(doc, flat=True)) == doc.get_map_flat()

    def test_to_yaml(self, doc):
        assert yaml.safe_load(to_yaml(doc)) == doc.get_map()
        assert '毚饯' in to_yaml(doc)

    def test_dump_by_extension(self, tmp_path, doc):
        path = tmp_path / 'out.yml'
        dump(doc, str(path), flat=True)
        assert yaml.safe_load(path.read_text(encoding='utf-8')) == {
            'k0': 'v0', 's.k1': 'v1', '毚饯.䥵': '覎'}

    def test_dump_unknown_extension(self, tmp_path, doc):
        with pytest.raises(ValueError):
            dump(doc, str(tmp_path / 'out.txt'))
