# helpers.py
import math
import sys
from dataclasses import dataclass
from typing import Optional

import ffmpeg
import psutil

from . import config


@dataclass(frozen=True)
class EncodingRequest:
    input_file: str
    output_file: str
    target_bytes: int = config.TARGET_FILESIZE_BYTES
    audio_bitrate: int = config.AUDIO_BITRATE_BPS
    video_bitrate: Optional[int] = None # explicit override, bps


@dataclass(frozen=True)
class ResolvedBitrates:
    video_bps: int
    audio_bps: int

    @property
    def bufsize_bps(self) -> int:
        return self.video_bps // config.VIDEO_BUFSIZE_DIVISOR


def probeDuration(path, cmd=config.FFPROBE_CMD) -> Optional[float]:
    """
    Return the container duration of `path` in seconds, or None if it cannot be read.

    Every failure (ffprobe missing, non-zero exit, missing or garbled
    duration field) is reported as a warning and collapses to None.
    """
    try:
        probe = ffmpeg.probe(path, cmd=cmd)
        duration = float(probe['format']['duration'])
    except ffmpeg.Error as e:
        stderr = (e.stderr or b"").decode("utf-8", errors="replace").strip()
        print(f"[WARN] ffprobe failed on {path}: {stderr or e}", file=sys.stderr)
        return None
    except OSError as e:
        print(f"[WARN] Could not run ffprobe: {e}", file=sys.stderr)
        return None
    except (KeyError, TypeError, ValueError) as e:
        print(f"[WARN] Could not read duration of {path}: {e!r}", file=sys.stderr)
        return None

    if not math.isfinite(duration):
        print(f"[WARN] Could not read duration of {path}: {duration}", file=sys.stderr)
        return None
    return duration


def estimateVideoBitrate(duration_sec, target_bytes, audio_bps, override_bps=None) -> int:
    """
    Pick a video bitrate (bps) so that video + audio lands under target_bytes.

    - An explicit override is returned as-is, unclamped.
    - Unknown or non-positive duration gives the default bitrate.
    - SIZE_HEADROOM of the target is budgeted; audio is reserved first.
    - If audio alone eats the budget, fall back to the default bitrate.
    - Otherwise the per-second video budget is clamped to
      [MIN_VIDEO_BITRATE_BPS, MAX_VIDEO_BITRATE_BPS].
    """
    if override_bps is not None:
        return override_bps

    if not duration_sec or duration_sec <= 0:
        return config.DEFAULT_VIDEO_BITRATE_BPS

    audio_bytes = audio_bps / 8.0 * duration_sec
    reserve_bytes = target_bytes * config.SIZE_HEADROOM - audio_bytes
    if reserve_bytes <= 0:
        return config.DEFAULT_VIDEO_BITRATE_BPS

    candidate = int(reserve_bytes * 8.0 / duration_sec)
    return clampBitrate(candidate)


def clampBitrate(bps, lower=config.MIN_VIDEO_BITRATE_BPS, upper=config.MAX_VIDEO_BITRATE_BPS):
    return max(lower, min(bps, upper))


def resolveBitrates(request: EncodingRequest, duration_sec) -> ResolvedBitrates:
    """Combine the estimated video bitrate with the requested audio bitrate."""
    video_bps = estimateVideoBitrate(
        duration_sec,
        request.target_bytes,
        request.audio_bitrate,
        override_bps=request.video_bitrate,
    )
    return ResolvedBitrates(video_bps=video_bps, audio_bps=request.audio_bitrate)


def formatBPSToFfmpeg(bps):
    """Format bits-per-second to an ffmpeg 'k' string (truncated kbps)."""
    return f"{int(bps) // 1000}k"


def encoderThreads(max_threads=config.MAX_THREADS):
    return min(psutil.cpu_count() or 1, max_threads)
