import os
import logging


def create_dirs(dirs):
  """
  Create the given directories if they are not found
  :param dirs: a list of directories
  """
  for dir_ in dirs:
    if not os.path.exists(dir_):
      os.makedirs(dir_)
      logging.getLogger("Dirs").debug(f"Created directory {dir_}")
