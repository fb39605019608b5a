import argparse
import logging
import sys

from utils.config import process_config, setup_logging
from utils.errors import FrismError, UsageError
from utils.size import join_size_tokens

from agents import *


USAGE = """
    Usage: frism [options] <split|join> filename.ext  <N[k|m|g]>  [outfile.ext]
                                                      ----------  ------------
                                                        (split)      (join)

    Splitting

      $ frism split filename.ext 50m
      $ frism split - filename.ext 50m
     >> filename.ext.0, filename.ext.1, ...

      Everything after the filename is joined into one size with all whitespace
      removed, so "1 00 0 000 k" is a valid size. With - as the filename the bytes
      are read from stdin and the next argument is the basename of the parts.

    Joining

      $ frism join filename.ext
     >> filename.ext

      Parts are found by appending .0, .1, ... to the basename until one is missing.
      The output is named after the last component of the basename, in the current
      directory, unless an output file is given after the basename.

    Options (before split or join)

      --config FILE   YAML config file
      --log-dir DIR   also write rotating log files to DIR
      --no-progress   do not show progress
      --stream        split stdin one part at a time instead of reading it all first
"""

AGENTS = {
    'split': 'SplitAgent',
    'join': 'JoinAgent',
}


class ArgumentParser(argparse.ArgumentParser):

  def error(self, message):
    raise UsageError("Invalid arguments", message)


def parse_arguments(argv=None):
  parser = ArgumentParser(prog='frism', usage=USAGE, add_help=False)
  parser.add_argument('--config', default=None, help='YAML config file')
  parser.add_argument('--log-dir', dest='log_dir', default=None, help='Directory for rotating log files')
  parser.add_argument('--no-progress', dest='progress', action='store_false', default=None,
                      help='Do not show progress')
  parser.add_argument('--stream', dest='stream_stdin', action='store_true', default=None,
                      help='Split stdin one part at a time')
  parser.add_argument('command', help='split or join')
  parser.add_argument('args', nargs=argparse.REMAINDER, help='arguments of the command')
  return parser.parse_args(argv)


def parse_command(command, args):
  """
  Interpret the positional arguments of a command
  :return: dict of per-run config values
  :raises UsageError: unknown command or missing arguments
  """
  if command not in AGENTS:
    raise UsageError("Invalid command. Use 'split' or 'join'")
  if not args:
    raise UsageError(f"Missing filename for {command}")

  run_config = {'agent': AGENTS[command], 'command': command}
  if command == 'split':
    source = args[0]
    if source == '-':
      if len(args) < 2:
        raise UsageError("Missing basename for the parts when splitting stdin")
      basename, size_tokens = args[1], args[2:]
    else:
      basename, size_tokens = source, args[1:]
    size = join_size_tokens(size_tokens)
    if not size:
      raise UsageError("Missing size for split")
    run_config.update(source=source, basename=basename, size=size)
  else:
    if len(args) > 2:
      raise UsageError(f"Unexpected arguments for join: {' '.join(args[2:])}")
    run_config.update(basename=args[0], outfile=args[1] if len(args) > 1 else None)
  return run_config


def main(argv=None, stdin=None, stdout=None):
  setup_logging()
  logger = logging.getLogger("Main")

  try:
    args = parse_arguments(argv)
    run_config = parse_command(args.command, args.args)
  except UsageError as exc:
    print(USAGE, file=sys.stderr)
    print(exc, file=sys.stderr)
    return 1

  overrides = dict(run_config, log_dir=args.log_dir, progress=args.progress, stream_stdin=args.stream_stdin)
  agent = None
  try:
    config = process_config(args.config, overrides)
    agent_class = globals()[config.agent]
    agent = agent_class(config, stdin=stdin, stdout=stdout)
    agent.run()
    agent.finalize()
  except (FrismError, OSError) as exc:
    if agent is not None:
      agent.close_progress_bar()
    logger.error(f"Failed to {args.command}: {exc}")
    return 1
  return 0


if __name__ == '__main__':
  sys.exit(main())
