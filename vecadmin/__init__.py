r"""
The vecadmin package provides a client for the projects, organizations and API keys admin API, and a codec
that packs float and string matrices into the flat NdArray wire format used by the vector service.
"""

__version__ = "0.3.0"

from .core.ndarray import (
    NdArray,
    float_arr_to_ndarray,
    float_ndarray_to_arr,
    string_arr_to_ndarray,
    string_ndarray_to_arr,
)
from .client import AdminClient

__all__ = [
    "AdminClient",
    "NdArray",
    "float_arr_to_ndarray",
    "float_ndarray_to_arr",
    "string_arr_to_ndarray",
    "string_ndarray_to_arr",
    "__version__",
]
