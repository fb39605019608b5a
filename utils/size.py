import logging
import re

from utils.errors import SizeParseError

logger = logging.getLogger("Size")

UNITS = {
    'k': 1024,
    'm': 1024 * 1024,
    'g': 1024 * 1024 * 1024,
}

DIGITS_RE = re.compile(r"[0-9]+")


def join_size_tokens(tokens):
  """
  Concatenate the size tokens given on the command line and drop all whitespace,
  so "1 00 0 k" is read as "1000k"
  """
  return "".join("".join(tokens).split())


def parse_size(size_str, strict_suffix=True):
  """
  Turn a size literal such as "10", "50m" or "1G" into a byte count.

  Exactly one trailing letter is stripped. k, m and g (any case) multiply by 1024, 1024**2 and 1024**3.
  Any other letter is rejected unless strict_suffix is False, in which case it is dropped and
  the multiplier stays 1.
  :param size_str: the literal, whitespace already removed
  :param strict_suffix: reject unknown unit letters
  :return: the size in bytes, always >= 1
  :raises SizeParseError: the digit portion is not a non-negative integer, the unit is unknown, or the size is 0
  """
  multiplier = 1
  number_str = size_str
  if size_str and size_str[-1].isalpha():
    unit = size_str[-1].lower()
    number_str = size_str[:-1]
    if unit in UNITS:
      multiplier = UNITS[unit]
    elif strict_suffix:
      raise SizeParseError(size_str, f"unknown unit '{size_str[-1]}', expected one of k, m, g")
    else:
      logger.warning(f"Ignoring unknown unit '{size_str[-1]}' in size \"{size_str}\"")

  if not DIGITS_RE.fullmatch(number_str):
    raise SizeParseError(size_str, f"'{number_str}' is not a non-negative integer")

  size = int(number_str) * multiplier
  if size == 0:
    raise SizeParseError(size_str, "chunk size must be at least 1 byte")
  return size
