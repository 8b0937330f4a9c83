# msws/config.py
# Configuration for the hosts around the generator (oracle service, CLI)

# Network config
HOST = '127.0.0.1'
PORT = 5000

# What /get_output serves: 'uint32' or 'uint64'
OUTPUT_MODE = 'uint32'

# CLI number format: 'hex' or 'dec'
OUTPUT_FORMAT = 'hex'

# Seed configuration:
# - SEED_MODE:
#     'fixed'  : use the integer in SEED (if SEED is None, falls back to deterministic constant)
#     'system' : os.urandom mixed with time and pid (non-deterministic each run)
#     'time'   : use current unix time as seed - low entropy
SEED_MODE = 'fixed'   # 'fixed' | 'system' | 'time'

# If SEED_MODE == 'fixed', use this SEED (32-bit integer).
SEED = 0x00000000  # or None

# If SEED_MODE == 'time', this controls whether we use seconds or milliseconds.
# 's' -> int(time.time()), 'ms' -> int(time.time() * 1000)
TIME_GRANULARITY = 's'  # 's' or 'ms'

# Largest block /get_bytes will hand out in one request
MAX_BYTES = 65536

# Chunk size for the CLI --binary stream
BUFF_SIZE = 4096

# Logging level
LOG_LEVEL = 'INFO'
