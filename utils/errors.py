"""
Exceptions raised by the chunking engine and the command line front end.
"""


class FrismError(Exception):
  """
  Base class for frism errors.
  Every error carries a human readable message and the reason that caused it.
  """

  def __init__(self, message, reason=None):
    super().__init__(message)
    self.message = message
    self.reason = reason

  def __str__(self):
    if self.reason:
      return f"{self.message}: {self.reason}"
    return self.message


class UsageError(FrismError):
  """Missing or invalid command line arguments."""


class SizeParseError(FrismError, ValueError):
  """
  A size literal could not be turned into a byte count.
  :param literal: the offending literal, after whitespace removal
  """

  def __init__(self, literal, reason):
    super().__init__(f'Invalid size argument "{literal}"', reason)
    self.literal = literal


class ConfigError(FrismError):
  pass
