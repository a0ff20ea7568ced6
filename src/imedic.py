#!/usr/bin/env python3
"""
imedic.py - Entry model and reader for the tab-separated IME dictionary
タブ区切りIME辞書のエントリモデルと読み込み処理

================================================================================
INPUT FORMAT / 入力形式
================================================================================

The source dictionary is a UTF-16LE text file (the format exported by the
Microsoft IME dictionary tool). The byte-order mark is optional; a
big-endian BOM switches decoding to big-endian. Broken UTF-16 sequences are
read as U+FFFD instead of stopping the conversion.

元辞書はUTF-16LEのテキストファイル（Microsoft IMEの辞書ツールの出力形式）。
BOMはあってもなくてもよい（ビッグエンディアンのBOMならビッグエンディアンで読む）。
不正なUTF-16の並びはU+FFFDとして読み、変換は止めない。

    !Microsoft IME Dictionary Tool
    あいどる	アイドル	名詞	idol
    てすと	テスト

    ┌────────┬────────┬────────┬──────────┐
    │ 0:Yomi │ 1:Kanji│ 2:Kind │ 3:Caption│
    │  読み   │  表記  │  品詞  │   注釈   │
    └────────┴────────┴────────┴──────────┘

    - Lines are trimmed before they are looked at.
      各行は前後の空白を除去してから処理する。
    - Empty lines and lines starting with "!" are skipped.
      空行と "!" で始まる行（コメント）は読み飛ばす。
    - Kind and Caption are optional; columns after the 4th are ignored.
      品詞と注釈は省略可。5列目以降は無視する。
    - A row without Yomi or Kanji is dropped.
      読みまたは表記が空の行は捨てる。

The entries keep the order of the source file. They are read once and
shared read-only by all writers (gboard.py, kotoeri.py, skk_jisyo.py).

エントリは元ファイルの順序を保つ。一度だけ読み込まれ、
全ての出力処理で読み取り専用として共有される。
"""

import codecs
import logging
from typing import NamedTuple

logger = logging.getLogger(__name__)

SOURCE_ENCODING = 'utf-16-le'
BOM_ENCODINGS = (
    (codecs.BOM_UTF16_LE, 'utf-16-le'),
    (codecs.BOM_UTF16_BE, 'utf-16-be'),
)
COMMENT_PREFIX = '!'


class ImeDicEntry(NamedTuple):
    """One row of the IME dictionary. Immutable once created."""
    yomi: str
    kanji: str
    kind: str = ''
    caption: str = ''

    @classmethod
    def from_row(cls, row):
        """Build an entry from split columns, padding missing ones with ''.

        Args:
            row: List of column strings (any length)

        Returns:
            ImeDicEntry
        """
        fields = list(row[:4]) + [''] * (4 - min(len(row), 4))
        return cls(*fields)

    def is_empty(self):
        return self.yomi == '' or self.kanji == ''


def parse_ime_dic_line(line):
    """
    Parse a single line of the IME dictionary.

    Args:
        line: A single line (line terminator may or may not be present)

    Returns:
        ImeDicEntry, or None if the line is blank, a comment, or lacks Yomi/Kanji
    """
    line = line.strip()
    if not line or line.startswith(COMMENT_PREFIX):
        return None

    entry = ImeDicEntry.from_row(line.split('\t'))
    if entry.is_empty():
        return None
    return entry


def decode_ime_dic_text(data):
    """
    Decode the raw bytes of the dictionary and split them into lines.

    A leading BOM selects little- or big-endian and is dropped; without a
    BOM the text is little-endian. Invalid sequences (unpaired surrogates,
    an odd trailing byte) become U+FFFD instead of failing.

    Lines end at "\\n" only. A "\\r" right before it is dropped, any other
    "\\r" stays in the line.

    Args:
        data: bytes read from the source file

    Returns:
        list: lines without their terminators
    """
    encoding = SOURCE_ENCODING
    for bom, bom_encoding in BOM_ENCODINGS:
        if data.startswith(bom):
            data = data[len(bom):]
            encoding = bom_encoding
            break

    text = data.decode(encoding, errors='replace')
    lines = text.split('\n')
    if lines[-1] == '':
        # Text ending with "\n" (or empty text) has no line after the last terminator
        lines.pop()
    return [line[:-1] if line.endswith('\r') else line for line in lines]


def read_ime_dic_file(src_file):
    """
    Read the whole IME dictionary file.

    Args:
        src_file: Path to the UTF-16 source dictionary

    Returns:
        list: ImeDicEntry objects in order of appearance

    Raises:
        OSError: the file cannot be opened or read
    """
    entries = []
    skipped_comments = 0
    skipped_incomplete = 0

    with open(src_file, 'rb') as f:
        data = f.read()

    for line_number, line in enumerate(decode_ime_dic_text(data), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            skipped_comments += 1
            continue

        entry = parse_ime_dic_line(stripped)
        if entry is None:
            logger.debug(f'{src_file}:{line_number}: skipping row without reading or surface form: {stripped!r}')
            skipped_incomplete += 1
            continue
        entries.append(entry)

    logger.info(f'Read {len(entries)} entries from {src_file} '
                f'(skipped {skipped_comments} blank/comment lines, {skipped_incomplete} incomplete rows)')
    return entries
