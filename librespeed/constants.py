"""
Shared constants used across all client modules.

Centralises magic numbers, endpoint paths, and tunables so they live in
exactly one place.
"""

# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------

DEFAULT_BASE_URL = "http://localhost:8989"

IDENTITY_PATH = "/getIP?isp=true"
EMPTY_PATH = "/empty"
GARBAGE_PATH = "/garbage"

# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------

DEFAULT_TIMEOUT = 10.0           # seconds, applied to every request
DEFAULT_PING_COUNT = 5
DEFAULT_PING_INTERVAL = 0.1      # 100 ms pause between pings, not measured

# ---------------------------------------------------------------------------
# Data transfer
# ---------------------------------------------------------------------------

DEFAULT_CHUNK_COUNT = 4          # sent verbatim as ``ckSize``
DEFAULT_CHUNK_SIZE = 1024 * 1024 # 1 MiB per garbage chunk
UPLOAD_BUFFER_SIZE = 1024 * 1024 # 1 MiB patterned upload payload
READ_CHUNK_SIZE = 64 * 1024      # streaming read size while draining downloads
