import copy
import logging
import os

import orjson

logger = logging.getLogger(__name__)


NAME_TO_LOGGING_LEVEL = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL,
}

# Targets in the order they are written by the driver
OUTPUT_TARGETS = ('gboard', 'kotoeri', 'skk')

DEFAULT_CONFIG = {
    'source': 'dic.txt',
    'outputs': {
        'gboard': os.path.join('dist', 'gboard.zip'),
        'kotoeri': os.path.join('dist', 'macosx.plist'),
        'skk': os.path.join('dist', 'skk-jisyo.imas.utf8'),
    },
    'gboard_locale': 'ja-JP',
    'kotoeri_escape_xml': False,
    'logging_level': 'INFO',
}


class ConfigError(ValueError):
    """Raised when a configuration file is missing or cannot be used."""


def get_package_name():
    '''
    returns 'imas-dic'
    '''
    return 'imas-dic'


def get_version():
    return '0.1.0'


def get_default_config_path():
    '''
    Return the path of the config file looked up when none is given
    on the command line. It is relative to the current directory.
    '''
    return get_package_name() + '.json'


def get_default_config_data():
    return copy.deepcopy(DEFAULT_CONFIG)


def get_logging_level(name):
    '''
    Map a level name from the config to a logging constant.
    Unknown names fall back to INFO.
    '''
    if name not in NAME_TO_LOGGING_LEVEL:
        logger.warning(f'Specified logging level {name} is not recognized. Using the default INFO level.')
        return logging.INFO
    return NAME_TO_LOGGING_LEVEL[name]


def _append_warning(warnings, warning_msg):
    logger.warning(warning_msg)
    return warnings + ("\n" if warnings else "") + warning_msg


def get_config_data(configfile_path=None):
    '''
    Load the JSON config file and validate it against DEFAULT_CONFIG.

    Missing keys are filled with the default value, and keys whose type
    differs from the default are replaced by the default. The "outputs"
    object is validated key by key in the same way.

    Args:
        configfile_path: Path to the config file. If None, the default
                         path (imas-dic.json in the current directory) is
                         used and its absence is silent.

    Returns:
        tuple: (config_data, warnings_string) where warnings_string is empty if no warnings

    Raises:
        ConfigError: if a path given explicitly does not exist, or the file
                     cannot be read or is not a JSON object
    '''
    default_config = get_default_config_data()
    warnings = ""
    explicit = configfile_path is not None
    if configfile_path is None:
        configfile_path = get_default_config_path()

    if not os.path.exists(configfile_path):
        if explicit:
            raise ConfigError(f'Config file {configfile_path} is not found')
        logger.debug(f'No config file at {configfile_path}, using the default configuration')
        return default_config, warnings

    try:
        with open(configfile_path, 'rb') as f:
            config_data = orjson.loads(f.read())
    except orjson.JSONDecodeError as e:
        raise ConfigError(f'Error loading the config file {configfile_path}: {e}') from e
    except OSError as e:
        raise ConfigError(f'Cannot read the config file {configfile_path}: {e}') from e

    if not isinstance(config_data, dict):
        raise ConfigError(f'The config file {configfile_path} must contain a JSON object')

    for k in default_config:
        if k not in config_data:
            warnings = _append_warning(warnings, f'The key "{k}" was not found in {configfile_path} . Copying the default key-value')
            config_data[k] = default_config[k]
        if type(config_data[k]) != type(default_config[k]):
            warnings = _append_warning(warnings, f'Type mismatch found for the key "{k}" in {configfile_path}. Replacing the value of this key with the default value')
            config_data[k] = default_config[k]

    # Deep validation for the nested "outputs" object
    outputs = config_data['outputs']
    for target in OUTPUT_TARGETS:
        if target not in outputs:
            warnings = _append_warning(warnings, f'The "outputs.{target}" key is missing. Using the default path {default_config["outputs"][target]}')
            outputs[target] = default_config['outputs'][target]
        elif not isinstance(outputs[target], str):
            warnings = _append_warning(warnings, f'The "outputs.{target}" key has invalid type (expected string). Resetting to default.')
            outputs[target] = default_config['outputs'][target]

    return config_data, warnings


def escape_slashes(src):
    '''
    Replace every "/" with the fullwidth solidus "／".
    "/" is the candidate delimiter of the SKK dictionary format.
    '''
    return src.replace('/', '／')


def open_output_file(dst_file, binary=False):
    '''
    Open a destination file for writing, creating missing parent
    directories. An existing file is truncated on open.

    Text files are written as UTF-8 with "\\n" line endings on every platform.
    '''
    parent = os.path.dirname(dst_file)
    if parent:
        os.makedirs(parent, exist_ok=True)
    if binary:
        return open(dst_file, 'wb')
    return open(dst_file, 'w', encoding='utf-8', newline='\n')
