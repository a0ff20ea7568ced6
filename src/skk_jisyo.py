"""
skk_jisyo.py - Writer for the SKK dictionary (SKK-JISYO format)
SKK辞書（SKK-JISYO形式）の出力処理

SKK format: reading /candidate1/candidate2/.../
Example: あやこ /亜矢子/彩子/

Entries sharing a reading have to be merged onto one line. The line of a
reading is placed where the reading first appeared in the input, and its
candidates keep the input order.

よみが同じ単語を一行にまとめる。行の順序はよみが最初に現れた順。

A candidate may carry an annotation after ";". Kind and Caption are written
as the annotation "Kind,Caption" (Caption only when Kind is present).
"""

import logging

import util

logger = logging.getLogger(__name__)

HEADER = (';; imas dic for SKK system\n'
          ';; Keywords: japanese\n'
          ';; okuri-ari entries.\n'
          ';; okuri-nasi entries.\n')


def group_entries_by_yomi(entries):
    """
    Group entries by reading.

    Args:
        entries: Sequence of ImeDicEntry

    Returns:
        dict: {yomi: [entries]}; keys are in order of first appearance
    """
    groups = {}
    for entry in entries:
        groups.setdefault(entry.yomi, []).append(entry)
    return groups


def format_skk_candidate(entry):
    """
    Format one candidate (without the leading slash).

    Example: 亜;名詞,注釈
    """
    candidate = util.escape_slashes(entry.kanji)
    if entry.kind:
        candidate += ';' + util.escape_slashes(entry.kind)
        if entry.caption:
            candidate += ',' + util.escape_slashes(entry.caption)
    return candidate


def format_skk_line(yomi, entries):
    candidates = ''.join('/' + format_skk_candidate(entry) for entry in entries)
    return yomi + ' ' + candidates + '/\n'


def create_skk_dic(dst_file, entries):
    """
    Write the SKK dictionary.

    Args:
        dst_file: Path of the dictionary to create (overwritten if present)
        entries: Sequence of ImeDicEntry

    Returns:
        dict: stats with 'total_readings' and 'total_candidates'

    Raises:
        OSError: on any failure to create or write the file
    """
    groups = group_entries_by_yomi(entries)
    stats = {'total_readings': len(groups), 'total_candidates': 0}

    with util.open_output_file(dst_file) as fp_skk:
        fp_skk.write(HEADER)
        for yomi, yomi_entries in groups.items():
            fp_skk.write(format_skk_line(yomi, yomi_entries))
            stats['total_candidates'] += len(yomi_entries)

    logger.info(f'Generated SKK dictionary: {dst_file}')
    logger.info(f'Stats: {stats["total_readings"]} readings, {stats["total_candidates"]} candidates')
    return stats
