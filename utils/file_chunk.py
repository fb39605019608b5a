import logging
import os

from utils.byte_source import BufferSource, FileSource, StreamSource
from utils.errors import UsageError

logger = logging.getLogger("Chunker")


def part_path(basename, index):
    return f"{basename}.{index}"


def write_parts(source, basename, chunk_size, progress=None):
    """
    Write every window of a byte source to its own part file, <basename>.0, <basename>.1, ...
    :param source: a ByteSource
    :param progress: optional callable progress(part_name, bytes_done, total_bytes_or_None)
    :return: the list of part paths, in order
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be at least 1, got {chunk_size}")

    parts = []
    total_read = 0
    for chunk in source.chunks(chunk_size):
        part_name = part_path(basename, len(parts))
        with open(part_name, 'wb') as part_file:
            part_file.write(chunk)
            part_file.flush()
        total_read += len(chunk)
        parts.append(part_name)
        logger.debug(f"Wrote {part_name} ({len(chunk)} bytes)")
        if progress is not None:
            progress(part_name, total_read, source.total_length)
    logger.info(f"Split {total_read} bytes into {len(parts)} parts of up to {chunk_size} bytes")
    return parts


def split_file(file_path, chunk_size, progress=None, file=None):
    """
    Split a seekable file into parts named after it, reading through a single reusable buffer.
    Parts already written are left on disk if an error interrupts the split.
    :param file: an already open binary handle of file_path; left open, and unread if it cannot seek
    :raises NotSeekableError: the file cannot seek; nothing has been written or read yet
    """
    with FileSource(file_path, file=file) as source:
        return write_parts(source, file_path, chunk_size, progress)


def split_bytes(data, basename, chunk_size, progress=None):
    """Split bytes held in memory into parts named <basename>.N"""
    return write_parts(BufferSource(data), basename, chunk_size, progress)


def split_stream(stream, basename, chunk_size, progress=None):
    """Split a readable binary stream into parts without holding more than one part in memory"""
    return write_parts(StreamSource(stream), basename, chunk_size, progress)


def iter_parts(basename):
    """
    Yield <basename>.0, <basename>.1, ... for as long as they exist.
    The first missing index ends the run; later parts are never looked at.
    """
    index = 0
    while True:
        part_name = part_path(basename, index)
        if not os.path.exists(part_name):
            return
        yield part_name
        index += 1


def join_file(basename, outfile=None, progress=None):
    """
    Concatenate the contiguous run of parts of basename into one file.
    :param outfile: output path, defaults to the final path component of basename
    :raises UsageError: no outfile and basename has no final component, e.g. "/"
    :param progress: optional callable progress(part_name, bytes_done, None)
    :return: the output path
    """
    if outfile is None:
        outfile = os.path.basename(os.path.normpath(basename))
        if not outfile:
            raise UsageError(f"Cannot name the output after {basename!r}, give an output file")

    total_written = 0
    joined = 0
    with open(outfile, 'wb') as output_file:
        for part_name in iter_parts(basename):
            with open(part_name, 'rb') as part_file:
                data = part_file.read()
            output_file.write(data)
            total_written += len(data)
            joined += 1
            logger.debug(f"Joined {part_name} ({len(data)} bytes)")
            if progress is not None:
                progress(part_name, total_written, None)

    if joined == 0:
        logger.warning(f"No parts found for {basename}, wrote an empty {outfile}")
    logger.info(f"Joined {joined} parts ({total_written} bytes) into {outfile}")
    return outfile
