import os
import re
import asyncio
import threading
import concurrent.futures
import logging
import aiofiles
from typing import AsyncIterator, AsyncIterable, TextIO
from .link import Link
from ..error_handler import SetupError

logger = logging.getLogger(__name__)

# Best-effort match for http(s)://[www.]domain.tld[/path?query]
URL_PATTERN = re.compile(
    r'(https?)://(www\.)?[-a-zA-Z0-9@:%._+~#=]{2,256}\.[a-z]{2,4}\b([-a-zA-Z0-9@:%_+.~#?&/=]*)'
)


def find_urls(line: str) -> list[str]:
    """Return every URL-shaped substring of a line, duplicates included"""
    return [match.group(0) for match in URL_PATTERN.finditer(line)]


_END_OF_STREAM = object()


def _pump_lines(stream: TextIO, loop: asyncio.AbstractEventLoop, lines: asyncio.Queue):
    """Reader thread body: forward lines to the loop, then an end marker or the read error"""
    try:
        while True:
            try:
                line = stream.readline()
            except (OSError, ValueError) as e:
                item = e
                break
            if not line:
                item = _END_OF_STREAM
                break
            asyncio.run_coroutine_threadsafe(lines.put(line), loop).result()

        asyncio.run_coroutine_threadsafe(lines.put(item), loop).result()
    except (RuntimeError, concurrent.futures.CancelledError):
        # Event loop shut down before the stream ended
        return


async def read_paths(stream: TextIO) -> AsyncIterator[str]:
    """Yield absolute paths from a newline-delimited stream

    The stream is read on a daemon thread, so a pipe that never reaches
    EOF neither stalls the validator workers nor blocks interpreter exit.

    Raises:
        SetupError: if the stream itself cannot be read
    """
    loop = asyncio.get_running_loop()
    lines: asyncio.Queue = asyncio.Queue(maxsize=100)
    reader = threading.Thread(
        target=_pump_lines,
        args=(stream, loop, lines),
        name='linch-path-reader',
        daemon=True,
    )
    reader.start()

    while True:
        item = await lines.get()
        if item is _END_OF_STREAM:
            return
        if isinstance(item, Exception):
            raise SetupError(f"cannot read input paths: {item}") from item

        raw_path = item.rstrip('\r\n')
        if not raw_path.strip():
            continue
        yield os.path.abspath(raw_path)



async def extract_links_from_file(path: str) -> AsyncIterator[Link]:
    """Yield every URL in a single file; unreadable files yield nothing"""
    if os.path.isdir(path):
        logger.debug(f"Skipping directory: {path}")
        return

    try:
        async with aiofiles.open(path, mode='r', encoding='utf-8', errors='replace') as f:
            async for line in f:
                for url in find_urls(line):
                    yield Link(url=url, path=path)
    except OSError as e:
        logger.debug(f"Skipping unreadable file {path}: {e}")


async def extract_links(paths: AsyncIterable[str]) -> AsyncIterator[Link]:
    """Chain link extraction over a stream of file paths"""
    files_scanned = 0
    async for path in paths:
        files_scanned += 1
        async for link in extract_links_from_file(path):
            yield link

    logger.info(f"Extraction finished: {files_scanned} paths scanned")
