import numpy as np


FLOAT32_DTYPE = "float32"
# little-endian float32, the only byte order used on the wire
FLOAT32_WIRE_DTYPE = np.dtype("<f4")

STRING_DTYPE_PREFIX = "|S"
STRING_ENCODING = "utf-8"
# keeps bytes that are not valid utf-8 recoverable after decoding
STRING_ERRORS = "surrogateescape"

# shape entries are unsigned 32-bit on the wire
MAX_DIM_SIZE = 2**32 - 1
