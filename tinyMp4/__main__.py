# __main__.py
import argparse
import shlex
import sys

from . import config
from .helpers import EncodingRequest, encoderThreads, probeDuration, resolveBitrates
from .encoder import compileEncodeCommand, encodeFile


def positiveInt(text):
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {text!r}")
    return value


def buildParser():
    ap = argparse.ArgumentParser(
        prog="tinymp4",
        description="Shrink an MP4 to a target size using ffmpeg re-encoding.",
    )
    ap.add_argument("input", help="Input MP4 file path.")
    ap.add_argument("output", help="Output MP4 file path.")
    ap.add_argument(
        "--target-bytes",
        type=positiveInt,
        default=config.TARGET_FILESIZE_BYTES,
        help=f"Target file size in bytes (default {config.TARGET_FILESIZE_BYTES}).",
    )
    ap.add_argument(
        "--video-bitrate",
        type=positiveInt,
        default=None,
        help="Video bitrate in bps. If omitted, calculated from the target size.",
    )
    ap.add_argument(
        "--audio-bitrate",
        type=positiveInt,
        default=config.AUDIO_BITRATE_BPS,
        help=f"Audio bitrate in bps (default {config.AUDIO_BITRATE_BPS}).",
    )
    ap.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print the ffmpeg command line before running it.",
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {config.VERSION}")
    return ap


def main(argv=None):
    args = buildParser().parse_args(argv)

    request = EncodingRequest(
        input_file=args.input,
        output_file=args.output,
        target_bytes=args.target_bytes,
        audio_bitrate=args.audio_bitrate,
        video_bitrate=args.video_bitrate,
    )

    # ---- probe + estimate ----
    duration = probeDuration(request.input_file) or 0.0
    bitrates = resolveBitrates(request, duration)

    print(f"[INFO] duration={duration:.2f}s, video_bitrate={bitrates.video_bps}bps, "
          f"audio_bitrate={bitrates.audio_bps}bps", file=sys.stderr)

    # ---- encode ----
    threads = encoderThreads()
    if args.verbose:
        cmd = compileEncodeCommand(request.input_file, request.output_file, bitrates, threads=threads)
        print(f"[DEBUG] {shlex.join(cmd)}", file=sys.stderr)

    try:
        result = encodeFile(request.input_file, request.output_file, bitrates, threads=threads)
    except OSError as e:
        print(f"[ERROR] could not run ffmpeg: {e}", file=sys.stderr)
        return 1

    if not result.success:
        code = result.exit_code if result.exit_code is not None else "unavailable"
        print(f"[ERROR] ffmpeg failed, exit code: {code}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
