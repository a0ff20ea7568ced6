"""
gboard.py - Writer for the Gboard user dictionary (zip archive)
Gboardユーザー辞書（zipアーカイブ）の出力処理

The archive holds a single member "dictionary.txt":

    # Gboard Dictionary version:1
    あいどる	アイドル	ja-JP
    てすと	テスト	ja-JP

Rows are written in input order; Kind and Caption are not part of the format.
"""

import logging
import zipfile

import util

logger = logging.getLogger(__name__)

MEMBER_NAME = 'dictionary.txt'
HEADER = '# Gboard Dictionary version:1\n'
DEFAULT_LOCALE = 'ja-JP'

# Fixed member timestamp so that the same input gives the same archive bytes
MEMBER_DATE_TIME = (1980, 1, 1, 0, 0, 0)


def format_gboard_line(entry, locale=DEFAULT_LOCALE):
    return entry.yomi + '\t' + entry.kanji + '\t' + locale + '\n'


def create_gboard_dic(dst_file, entries, locale=DEFAULT_LOCALE):
    """
    Write the Gboard dictionary archive.

    Args:
        dst_file: Path of the zip file to create (overwritten if present)
        entries: Sequence of ImeDicEntry
        locale: Locale tag put in the third column of every row

    Raises:
        OSError: on any failure to create, write or close the archive
    """
    member = zipfile.ZipInfo(MEMBER_NAME, date_time=MEMBER_DATE_TIME)
    member.compress_type = zipfile.ZIP_DEFLATED

    count = 0
    with util.open_output_file(dst_file, binary=True) as fp_zip:
        with zipfile.ZipFile(fp_zip, 'w') as zip_writer:
            with zip_writer.open(member, 'w') as writer:
                writer.write(HEADER.encode('utf-8'))
                for entry in entries:
                    writer.write(format_gboard_line(entry, locale).encode('utf-8'))
                    count += 1

    logger.info(f'Generated Gboard dictionary: {dst_file} ({count} entries)')
    return count
