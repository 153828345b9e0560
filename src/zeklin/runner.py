from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional, Sequence

from .logging import ZeklinLogger

_CHUNK_BYTES = 65_536
# Longer runs without a newline are flushed as one line.
_LINE_LIMIT_BYTES = 1_000_000


def _emit(raw: bytes, source: str, logger: ZeklinLogger) -> None:
    logger.stream(raw.decode("utf-8", errors="replace").rstrip("\r\n"), source)


async def _pump(stream: Optional[asyncio.StreamReader], source: str, logger: ZeklinLogger) -> None:
    if stream is None:
        return
    buffer = b""
    while True:
        chunk = await stream.read(_CHUNK_BYTES)
        if not chunk:
            break
        buffer += chunk
        *lines, buffer = buffer.split(b"\n")
        for line in lines:
            _emit(line, source, logger)
        if len(buffer) >= _LINE_LIMIT_BYTES:
            _emit(buffer, source, logger)
            buffer = b""
    if buffer:
        _emit(buffer, source, logger)


async def run_command(command: str, cwd: Optional[Path], logger: ZeklinLogger) -> int:
    """Run one shell command line, streaming its output; return its exit status."""
    proc = await asyncio.create_subprocess_shell(
        command,
        cwd=str(cwd) if cwd is not None else None,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        await asyncio.gather(
            _pump(proc.stdout, "stdout", logger),
            _pump(proc.stderr, "stderr", logger),
        )
    except BaseException:
        try:
            proc.kill()
        except ProcessLookupError:
            pass
        await proc.wait()
        raise
    return int(await proc.wait())
