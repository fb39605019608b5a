import time
import logging


def format_size(num_bytes):
  """
  Format a byte count for humans, e.g. 1536 -> '1.5KiB'
  """
  size = float(num_bytes)
  for unit in ['B', 'KiB', 'MiB', 'GiB']:
    if size < 1024.0:
      return f"{size:.1f}{unit}" if unit != 'B' else f"{int(size)}B"
    size /= 1024.0
  return f"{size:.1f}TiB"


def timeit(f):
  """ Decorator to time Any Function """

  def timed(*args, **kwargs):
    start_time = time.time()
    result = f(*args, **kwargs)
    end_time = time.time()
    seconds = end_time - start_time
    logging.getLogger("Timer").info("   [-] %s : %2.5f sec, which is %2.5f min" %
                                    (f.__name__, seconds, seconds / 60))
    return result

  return timed
