from agents.base import BaseAgent
from utils.byte_source import NotSeekableError
from utils.file_chunk import split_bytes, split_file, split_stream
from utils.misc import format_size, timeit
from utils.size import parse_size


class SplitAgent(BaseAgent):
  def __init__(self, config, stdin=None, stdout=None):
    super().__init__(config, stdin, stdout)
    self.chunk_size = config.get('chunk_size')
    if not self.chunk_size:
      self.chunk_size = parse_size(config.size, strict_suffix=config.strict_size_suffix)
    self.source = config.source
    self.basename = config.basename if config.source == '-' else config.source
    self.parts = []

  def report_progress(self, part_name, bytes_done, total):
    """
    Progress sink handed to the splitters.
    With a known total the bar shows the percentage of bytes consumed, otherwise it counts parts
    """
    if self.progress_bar is None:
      self.progress_bar = self.make_progress_bar(total)
    if total is None:
      self.progress_bar.update(1)
    else:
      self.progress_bar.update(bytes_done - self.progress_bar.n)
    self.progress_bar.set_postfix_str(f"Wrote {part_name}", refresh=True)

  @timeit
  def run(self):
    self.logger.info(f"Splitting {'stdin' if self.source == '-' else self.source} "
                     f"into parts of {format_size(self.chunk_size)}")
    if self.source == '-':
      self.split_stdin()
    else:
      self.split_path()

  def split_path(self):
    progress = self.report_progress if self.config.progress else None
    # opened once, a FIFO cannot be reopened after the failed seek
    with open(self.source, 'rb') as f:
      try:
        self.parts = split_file(self.source, self.chunk_size, progress=progress, file=f)
      except NotSeekableError as exc:
        self.logger.warning(f"{exc}, reading {self.source} into memory instead")
        self.parts = split_bytes(f.read(), self.basename, self.chunk_size)

  def split_stdin(self):
    if self.config.stream_stdin:
      progress = self.report_progress if self.config.progress else None
      self.parts = split_stream(self.stdin, self.basename, self.chunk_size, progress=progress)
    else:
      self.parts = split_bytes(self.stdin.read(), self.basename, self.chunk_size)

  def finalize(self):
    self.close_progress_bar()
    self.logger.info(f"Wrote {len(self.parts)} parts for {self.basename}")
