# config.py

VERSION = "0.1.0"

# external executables (resolved from PATH)
FFMPEG_CMD = "ffmpeg"
FFPROBE_CMD = "ffprobe"


# ---- user-visible targets ----
TARGET_FILESIZE_BYTES = 10 * 1024 * 1024 # 10 MiB in BYTES
AUDIO_BITRATE_BPS = 64_000


# ---- bitrate estimation policy ----
DEFAULT_VIDEO_BITRATE_BPS = 500_000 # used when no estimate is possible
MIN_VIDEO_BITRATE_BPS = 200_000
MAX_VIDEO_BITRATE_BPS = 1_500_000
SIZE_HEADROOM = 0.85 # encoders overshoot the average bitrate; keep 15% spare


# ---- general settings ----
MAX_THREADS = 8


# ---- video defaults ----
VIDEO_CODEC = "libx264"
VIDEO_PRESET = "medium"
VIDEO_CRF = 32
VIDEO_MAX_WIDTH = 640
VIDEO_BUFSIZE_DIVISOR = 4 # bufsize = video bitrate / 4


# ---- audio defaults ----
AUDIO_CODEC = "aac"


# ---- container ----
MOVFLAGS = "+faststart"
