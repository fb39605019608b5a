"""
Byte sources consumed by the splitters.

A source hands out the data it holds as consecutive windows of at most chunk_size bytes.
FileSource reads a seekable file through one reusable buffer, BufferSource slices bytes
already held in memory and StreamSource reads a stream of unknown length window by window.
"""
import io
import os


class NotSeekableError(OSError):
  """The source cannot seek, so its length is unknown. Read it into memory or stream it instead."""


def measure_length(f):
  """
  Determine the length of an open file by seeking to its end and back to the start
  :raises NotSeekableError: if the file does not support seeking
  """
  try:
    length = f.seek(0, os.SEEK_END)
    f.seek(0, os.SEEK_SET)
  except (io.UnsupportedOperation, OSError) as exc:
    name = getattr(f, 'name', repr(f))
    raise NotSeekableError(f"Failed to seek {name}; can't determine size") from exc
  return length


class ByteSource:
  """
  Base class of the byte sources.
  total_length is the number of bytes the source holds, or None when it is not known up front.
  """
  total_length = None

  def chunks(self, chunk_size):
    raise NotImplementedError

  def close(self):
    pass

  def __enter__(self):
    return self

  def __exit__(self, exc_type, exc_value, traceback):
    self.close()


class FileSource(ByteSource):
  """
  A seekable on-disk file.
  Memory use is one buffer of chunk_size bytes, the windows handed out are views into it
  and are only valid until the next window is requested.
  """

  def __init__(self, path, file=None):
    self.path = path
    # a handle passed in stays open, it belongs to the caller
    self.owns_file = file is None
    self.file = open(path, 'rb') if file is None else file
    try:
      self.total_length = measure_length(self.file)
    except NotSeekableError:
      self.close()
      raise

  def chunks(self, chunk_size):
    buffer = bytearray(chunk_size)
    view = memoryview(buffer)
    while True:
      bytes_read = self.file.readinto(buffer)
      if not bytes_read:
        break
      yield view[:bytes_read]

  def close(self):
    if self.owns_file:
      self.file.close()


class BufferSource(ByteSource):
  """Bytes that have already been read into memory, e.g. the whole of a pipe."""

  def __init__(self, data):
    self.data = data
    self.total_length = len(data)

  def chunks(self, chunk_size):
    view = memoryview(self.data)
    index = 0
    while index < len(view):
      size = min(chunk_size, len(view) - index)
      yield view[index:index + size]
      index += size


class StreamSource(ByteSource):
  """
  Any readable binary stream, read one window at a time.
  Short reads are topped up so every window but the last holds exactly chunk_size bytes.
  """

  def __init__(self, stream):
    self.stream = stream

  def chunks(self, chunk_size):
    while True:
      chunk = self.stream.read(chunk_size)
      if not chunk:
        break
      while len(chunk) < chunk_size:
        more = self.stream.read(chunk_size - len(chunk))
        if not more:
          break
        chunk += more
      yield chunk
