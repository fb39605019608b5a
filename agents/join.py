from agents.base import BaseAgent
from utils.file_chunk import join_file
from utils.misc import timeit


class JoinAgent(BaseAgent):
  def __init__(self, config, stdin=None, stdout=None):
    super().__init__(config, stdin, stdout)
    self.basename = config.basename
    self.outfile = config.get('outfile', None)

  def report_progress(self, part_name, bytes_done, total):
    if self.progress_bar is None:
      self.progress_bar = self.make_progress_bar()
    self.progress_bar.update(1)
    self.progress_bar.set_postfix_str(f"Joined {part_name}", refresh=True)

  @timeit
  def run(self):
    progress = self.report_progress if self.config.progress else None
    self.outfile = join_file(self.basename, self.outfile, progress=progress)

  def finalize(self):
    self.close_progress_bar()
    print(f"Wrote to {self.outfile}", file=self.stdout)
