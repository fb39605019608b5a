"""
The Base Agent class, where all other agents inherit from, that contains definitions for all the necessary functions
"""
import logging
import sys

from tqdm import tqdm


class BaseAgent:
  """
  This base class will contain the base functions to be overloaded by any agent you will implement.
  """

  def __init__(self, config, stdin=None, stdout=None):
    self.config = config
    self.logger = logging.getLogger(type(self).__name__)
    self._stdin = stdin
    self.stdout = stdout if stdout is not None else sys.stdout
    self.progress_bar = None

  @property
  def stdin(self):
    return self._stdin if self._stdin is not None else sys.stdin.buffer

  def make_progress_bar(self, total=None):
    """
    Progress is a transient status line on stdout, overwritten in place
    """
    if total is None:
      return tqdm(file=self.stdout, unit='part')
    return tqdm(total=total, file=self.stdout, unit='B', unit_scale=True, unit_divisor=1024)

  def close_progress_bar(self):
    if self.progress_bar is not None:
      self.progress_bar.close()
      self.progress_bar = None

  def run(self):
    """
    The main operator
    :return:
    """
    raise NotImplementedError

  def finalize(self):
    """
    Finalizes all the operations of the operator and reports the results
    :return:
    """
    raise NotImplementedError
