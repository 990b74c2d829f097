# encoder.py
import subprocess
from dataclasses import dataclass
from typing import Optional

from . import config
from .build_ffmpeg_command import buildFFmpegCommand


@dataclass(frozen=True)
class EncodeResult:
    success: bool
    exit_code: Optional[int] # None when ffmpeg was killed by a signal


def compileEncodeCommand(input_file, outfile, bitrates, threads=None, cmd=config.FFMPEG_CMD):
    return buildFFmpegCommand(input_file, outfile, bitrates, threads=threads).compile(cmd=cmd)


def encodeFile(input_file, outfile, bitrates, threads=None, cmd=config.FFMPEG_CMD):
    """
    Run the encode synchronously with ffmpeg's stdout/stderr passed through.
    Returns an EncodeResult; raises OSError if ffmpeg cannot be started.
    """
    args = compileEncodeCommand(input_file, outfile, bitrates, threads=threads, cmd=cmd)

    proc = subprocess.Popen(args)
    returncode = proc.wait()

    exit_code = returncode if returncode >= 0 else None
    return EncodeResult(success=returncode == 0, exit_code=exit_code)
