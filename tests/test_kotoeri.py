#!/usr/bin/env python3
# tests/test_kotoeri.py - Unit tests for the Kotoeri property-list writer

import pytest
import os
import plistlib
import sys
import tempfile
import shutil

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from imedic import ImeDicEntry
from kotoeri import (
    HEADER,
    FOOTER,
    format_kotoeri_dict,
    create_kotoeri_dic,
)


class TestFormatKotoeriDict:
    """Test suite for format_kotoeri_dict() function"""

    def test_phrase_and_shortcut(self):
        """Test that phrase is the kanji and shortcut the reading"""
        block = format_kotoeri_dict(ImeDicEntry("てすと", "テスト", "", ""))
        assert block == (
            "\t<dict>\n"
            "\t\t<key>phrase</key>\n"
            "\t\t<string>テスト</string>\n"
            "\t\t<key>shortcut</key>\n"
            "\t\t<string>てすと</string>\n"
            "\t</dict>\n"
        )

    def test_values_not_escaped_by_default(self):
        """Test that special characters are inserted as they are"""
        block = format_kotoeri_dict(ImeDicEntry("あんど", "A&B<C>"))
        assert "<string>A&B<C></string>" in block

    def test_values_escaped_on_request(self):
        """Test that escape_xml escapes the values"""
        block = format_kotoeri_dict(ImeDicEntry("<", "A&B"), escape_xml=True)
        assert "<string>A&amp;B</string>" in block
        assert "<string>&lt;</string>" in block


class TestCreateKotoeriDic:
    """Test suite for create_kotoeri_dic() function"""

    @pytest.fixture
    def temp_dir(self):
        """Create a temporary directory for test files"""
        temp_dir = tempfile.mkdtemp()
        yield temp_dir
        shutil.rmtree(temp_dir)

    def _read(self, path):
        with open(path, 'r', encoding='utf-8', newline='') as f:
            return f.read()

    def test_document_structure(self, temp_dir):
        """Test header, one block per entry in order, and footer"""
        entries = [ImeDicEntry("てすと", "テスト"), ImeDicEntry("あい", "愛")]
        path = os.path.join(temp_dir, "macosx.plist")
        count = create_kotoeri_dic(path, entries)

        content = self._read(path)
        assert count == 2
        assert content.startswith(HEADER)
        assert content.endswith(FOOTER)
        assert content.index("テスト") < content.index("愛")

    def test_phrase_and_shortcut_keys(self, temp_dir):
        """Test that the string after each key holds the right field"""
        path = os.path.join(temp_dir, "macosx.plist")
        create_kotoeri_dic(path, [ImeDicEntry("てすと", "テスト", "", "")])
        content = self._read(path)
        assert "<key>phrase</key>\n\t\t<string>テスト</string>" in content
        assert "<key>shortcut</key>\n\t\t<string>てすと</string>" in content

    def test_readable_as_plist(self, temp_dir):
        """Test that the document parses as a property list"""
        path = os.path.join(temp_dir, "macosx.plist")
        create_kotoeri_dic(path, [ImeDicEntry("てすと", "テスト"), ImeDicEntry("あい", "愛")])
        with open(path, 'rb') as f:
            data = plistlib.load(f)
        assert data == [
            {"phrase": "テスト", "shortcut": "てすと"},
            {"phrase": "愛", "shortcut": "あい"},
        ]

    def test_empty_entries(self, temp_dir):
        """Test that no entries give an empty array"""
        path = os.path.join(temp_dir, "macosx.plist")
        create_kotoeri_dic(path, [])
        assert self._read(path) == HEADER + FOOTER

    def test_truncates_existing_file(self, temp_dir):
        """Test that a longer pre-existing file is fully replaced"""
        path = os.path.join(temp_dir, "macosx.plist")
        with open(path, 'wb') as f:
            f.write(b'garbage' * 1000)
        create_kotoeri_dic(path, [])
        assert os.path.getsize(path) == len((HEADER + FOOTER).encode('utf-8'))
