#!/usr/bin/env python3
"""
convert_dic.py - Command-line interface for converting the IME dictionary
IME辞書変換のコマンドラインインターフェース

================================================================================
OVERVIEW / 概要
================================================================================

Reads the tab-separated UTF-16LE dictionary once and writes it out in three
formats, one after another:

タブ区切りUTF-16LEの辞書を一度読み込み、3つの形式で順に書き出す:

    dic.txt ──► imedic.read_ime_dic_file()
                    │
                    ├──► gboard.create_gboard_dic()    → dist/gboard.zip
                    ├──► kotoeri.create_kotoeri_dic()  → dist/macosx.plist
                    └──► skk_jisyo.create_skk_dic()    → dist/skk-jisyo.imas.utf8

The first failure stops the run with exit status 1; later outputs are not
attempted and a partially written file is left as it is.

最初の失敗で終了ステータス1で停止する。以降の出力は行わない。

================================================================================
USAGE / 使用方法
================================================================================

    # Convert with the default paths
    # デフォルトのパスで変換
    python convert_dic.py

    # Use another source and skip the Kotoeri output
    # 別の入力を使い、ことえり出力を省略
    python convert_dic.py --source my_dic.txt --kotoeri ""

    # Read settings from a JSON file
    # JSONファイルから設定を読み込む
    python convert_dic.py --config imas-dic.json

================================================================================
"""

import argparse
import logging
import os
import sys

# Add src directory to path if needed
src_dir = os.path.dirname(os.path.abspath(__file__))
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

import gboard
import imedic
import kotoeri
import skk_jisyo
import util

logger = logging.getLogger(__name__)

TARGET_LABELS = {
    'gboard': 'Gboard',
    'kotoeri': 'Kotoeri',
    'skk': 'SKK',
}


def setup_logging(level=logging.INFO):
    """Configure the root logger once for the whole run."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)-8s %(message)s',
        datefmt='%H:%M:%S'
    )
    logging.getLogger().setLevel(level)


def apply_arguments(config, args):
    """Override config values with the ones given on the command line."""
    if args.source is not None:
        config['source'] = args.source
    for target in util.OUTPUT_TARGETS:
        value = getattr(args, target)
        if value is not None:
            config['outputs'][target] = value
    if args.escape_xml:
        config['kotoeri_escape_xml'] = True
    return config


def write_target(target, dst_file, entries, config):
    if target == 'gboard':
        gboard.create_gboard_dic(dst_file, entries, locale=config['gboard_locale'])
    elif target == 'kotoeri':
        kotoeri.create_kotoeri_dic(dst_file, entries, escape_xml=config['kotoeri_escape_xml'])
    elif target == 'skk':
        skk_jisyo.create_skk_dic(dst_file, entries)
    else:
        raise ValueError(f'Unknown output target: {target}')


def run_conversion(config):
    """
    Read the source dictionary and write every enabled output.

    Args:
        config: Validated configuration dictionary (see util.DEFAULT_CONFIG)

    Returns:
        int: exit status (0 on success, 1 on the first failure)
    """
    src_file = config['source']
    try:
        entries = imedic.read_ime_dic_file(src_file)
    except OSError as e:
        logger.error(f'Failed to read the source dictionary: {src_file} - {e}')
        return 1

    for target in util.OUTPUT_TARGETS:
        dst_file = config['outputs'][target]
        if not dst_file:
            logger.info(f'{TARGET_LABELS[target]} output is disabled, skipping')
            continue
        try:
            write_target(target, dst_file, entries, config)
        except OSError as e:
            logger.error(f'Failed to write the {TARGET_LABELS[target]} dictionary: {dst_file} - {e}')
            return 1

    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog='imas-dic-convert',
        description='Convert a tab-separated UTF-16LE IME dictionary into Gboard, Kotoeri and SKK dictionaries',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert dic.txt into dist/ with the default file names
  imas-dic-convert

  # Only write the SKK dictionary
  imas-dic-convert --gboard "" --kotoeri ""
"""
    )
    parser.add_argument('-c', '--config', default=None,
                        help=f'Path to the JSON config file (default: {util.get_default_config_path()} if present)')
    parser.add_argument('-s', '--source', default=None,
                        help='Path to the source dictionary (default: dic.txt)')
    parser.add_argument('--gboard', default=None,
                        help='Output path of the Gboard zip; "" disables it')
    parser.add_argument('--kotoeri', default=None,
                        help='Output path of the Kotoeri plist; "" disables it')
    parser.add_argument('--skk', default=None,
                        help='Output path of the SKK dictionary; "" disables it')
    parser.add_argument('--escape-xml', action='store_true',
                        help='Escape XML special characters in the Kotoeri plist')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose output')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {util.get_version()}')
    return parser


def main(argv=None):
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        config, _ = util.get_config_data(args.config)
    except util.ConfigError as e:
        logger.error(e)
        return 1

    if not args.verbose:
        logging.getLogger().setLevel(util.get_logging_level(config['logging_level']))

    config = apply_arguments(config, args)
    return run_conversion(config)


if __name__ == "__main__":
    sys.exit(main())
