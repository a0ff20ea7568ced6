"""
kotoeri.py - Writer for the macOS Japanese input method (Kotoeri) user dictionary
macOS日本語入力（ことえり）用ユーザー辞書の出力処理

The format is a property list: an array of dicts with "phrase" (the surface
form) and "shortcut" (the reading). The document is simple enough to be
assembled as text, so no XML library is involved.

Values are inserted as they are by default. A surface form or reading that
contains "<" or "&" produces a broken document unless escape_xml is set.
"""

import logging
from xml.sax.saxutils import escape

import util

logger = logging.getLogger(__name__)

HEADER = ('<?xml version="1.0" encoding="UTF-8"?>\n'
          '<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">\n'
          '<plist version="1.0">\n'
          '<array>\n')
FOOTER = ('</array>\n'
          '</plist>\n')


def format_kotoeri_dict(entry, escape_xml=False):
    """Return the <dict> block for one entry."""
    phrase = entry.kanji
    shortcut = entry.yomi
    if escape_xml:
        phrase = escape(phrase)
        shortcut = escape(shortcut)
    return ('\t<dict>\n'
            '\t\t<key>phrase</key>\n'
            f'\t\t<string>{phrase}</string>\n'
            '\t\t<key>shortcut</key>\n'
            f'\t\t<string>{shortcut}</string>\n'
            '\t</dict>\n')


def create_kotoeri_dic(dst_file, entries, escape_xml=False):
    """
    Write the property-list dictionary.

    Args:
        dst_file: Path of the plist file to create (overwritten if present)
        entries: Sequence of ImeDicEntry
        escape_xml: Escape "&", "<" and ">" in the values

    Raises:
        OSError: on any failure to create or write the file
    """
    count = 0
    with util.open_output_file(dst_file) as fp_plist:
        fp_plist.write(HEADER)
        for entry in entries:
            fp_plist.write(format_kotoeri_dict(entry, escape_xml))
            count += 1
        fp_plist.write(FOOTER)

    logger.info(f'Generated Kotoeri dictionary: {dst_file} ({count} entries)')
    return count
