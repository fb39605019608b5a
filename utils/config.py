import os

import logging
from logging import Formatter
from logging.handlers import RotatingFileHandler

from easydict import EasyDict

from utils.dirs import create_dirs
from utils.errors import ConfigError
from utils.size import parse_size

import yaml


DEFAULT_CONFIG = {
    'agent': None,
    'log_dir': None,
    'log_level': 'INFO',
    'progress': True,
    'stream_stdin': False,
    'strict_size_suffix': True,
}

# handlers installed by setup_logging, replaced on every call
_handlers = []


def setup_logging(log_dir=None, log_level='INFO'):

  log_file_format = "[%(levelname)s] - %(asctime)s - %(name)s - : %(message)s in %(pathname)s:%(lineno)d"
  log_console_format = "[%(levelname)s]: %(message)s"

  main_logger = logging.getLogger()
  main_logger.setLevel(logging.DEBUG)
  for handler in _handlers:
    main_logger.removeHandler(handler)
    handler.close()
  _handlers.clear()

  console_handler = logging.StreamHandler()
  console_handler.setLevel(str(log_level).upper())
  console_handler.setFormatter(Formatter(log_console_format))
  _handlers.append(console_handler)

  if log_dir:
    debug_file_handler = RotatingFileHandler(os.path.join(log_dir, 'frism_debug.log'),
                                             maxBytes=10**6, backupCount=5)
    debug_file_handler.setLevel(logging.DEBUG)
    debug_file_handler.setFormatter(Formatter(log_file_format))

    errors_file_handler = RotatingFileHandler(os.path.join(log_dir, 'frism_error.log'),
                                              maxBytes=10**6, backupCount=5)
    errors_file_handler.setLevel(logging.WARNING)
    errors_file_handler.setFormatter(Formatter(log_file_format))

    _handlers.extend([debug_file_handler, errors_file_handler])

  for handler in _handlers:
    main_logger.addHandler(handler)


def convert_keys_to_string(d):
    new_d = {}
    for k, v in d.items():
        if isinstance(v, dict):
            v = convert_keys_to_string(v)
        if isinstance(k, int):
            k = str(k)
        new_d[k] = v
    return new_d


def get_config_from_yaml(yaml_file):
  """
  Get the config from a YAML file
  :return: (config as EasyDict, raw dict)
  :raises ConfigError: the file is not valid YAML or does not hold a mapping
  """
  with open(yaml_file, 'r') as config_file:
    try:
      config_dict = yaml.full_load(config_file)
    except yaml.YAMLError as exc:
      raise ConfigError(f"Invalid config file {yaml_file}", str(exc)) from exc

  if config_dict is None:
    config_dict = {}
  if not isinstance(config_dict, dict):
    raise ConfigError(f"Invalid config file {yaml_file}", "top level must be a mapping")

  converted_dict = convert_keys_to_string(config_dict)
  unknown = sorted(set(converted_dict) - set(DEFAULT_CONFIG))
  if unknown:
    raise ConfigError(f"Invalid config file {yaml_file}", f"unknown keys {', '.join(unknown)}")
  return EasyDict(converted_dict), config_dict


def process_config(yaml_file=None, overrides=None):
  """
  Build the run configuration:
  the built-in defaults, updated by the YAML file if one is given, updated by the overrides
  (command line values; None means "not given" and is skipped).
  Then create the log directory and set up logging for the whole program
  :param yaml_file: optional path of a YAML config file
  :param overrides: dict of values from the command line
  :return: config object(namespace)
  """
  config = EasyDict(DEFAULT_CONFIG)
  if yaml_file is not None:
    file_config, _ = get_config_from_yaml(yaml_file)
    config.update(file_config)

  for key, value in (overrides or {}).items():
    if value is not None:
      config[key] = value

  # a bad size fails before the log directory or any log file is created
  if config.get('size') is not None:
    config.chunk_size = parse_size(config.size, strict_suffix=config.strict_size_suffix)

  if not isinstance(logging.getLevelName(str(config.log_level).upper()), int):
    raise ConfigError(f"Invalid log_level {config.log_level!r}", "expected DEBUG, INFO, WARNING or ERROR")

  if config.log_dir:
    create_dirs([config.log_dir])

  setup_logging(config.log_dir, config.log_level)

  logging.getLogger("Config").debug(f"Configuration: {dict(config)}")
  return config
