# build_ffmpeg_command.py
import ffmpeg

from . import config
from .helpers import formatBPSToFfmpeg


def scaleFilter(max_width=config.VIDEO_MAX_WIDTH):
    """Cap width at max_width, never upscale, keep aspect with an even height."""
    return f"scale='min({int(max_width)},iw)':-2"


def buildFFmpegCommand(input_file, output_file, bitrates, threads=None):
    """Build an ffmpeg-python command for a single-pass H.264 + AAC MP4 encode."""

    v_bitrate_str = formatBPSToFfmpeg(bitrates.video_bps)

    # Video arguments
    video_args = {
        "c:v": config.VIDEO_CODEC,
        "preset": config.VIDEO_PRESET,
        "crf": config.VIDEO_CRF,
        "b:v": v_bitrate_str,
        "maxrate": v_bitrate_str,
        "bufsize": formatBPSToFfmpeg(bitrates.bufsize_bps),
        "vf": scaleFilter(),
    }

    audio_args = {
        "c:a": config.AUDIO_CODEC,
        "b:a": formatBPSToFfmpeg(bitrates.audio_bps),
    }

    target_args = {
        "movflags": config.MOVFLAGS,
    }
    if threads:
        target_args["threads"] = int(threads)

    return (
        ffmpeg
        .input(input_file)
        .output(output_file, **video_args, **audio_args, **target_args)
        .overwrite_output()
    )
