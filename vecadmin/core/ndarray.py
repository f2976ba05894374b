import base64
import re
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np

from vecadmin.constants import (
    FLOAT32_DTYPE,
    FLOAT32_WIRE_DTYPE,
    MAX_DIM_SIZE,
    STRING_DTYPE_PREFIX,
    STRING_ENCODING,
    STRING_ERRORS,
)
from vecadmin.util.exceptions import (
    BufferSizeMismatchError,
    BufferUnderflowError,
    CompressedNdArrayError,
    DtypeMismatchError,
    EmptyArrayError,
    InconsistentRowsError,
    InvalidShapeError,
    ItemTooLongError,
    MalformedDtypeError,
)


_STRING_DTYPE_RE = re.compile(r"\|S([0-9]+)")

Matrix = Union[Sequence[Sequence[Any]], np.ndarray]


class NdArray(NamedTuple):
    """A flat, self-describing buffer holding a vector or a matrix.

    ``buffer`` is the row-major concatenation of the encoded elements, ``shape`` is either
    ``(column_count,)`` for a single row or ``(row_count, column_count)``, and ``dtype`` is
    ``"float32"`` or ``"|S<N>"``.
    """

    buffer: bytes
    shape: Tuple[int, ...]
    dtype: str
    compressed: bool = False

    def expected_nbytes(self) -> int:
        """Number of bytes ``buffer`` must hold for the declared shape and dtype."""
        row_count, column_count = resolve_shape(self.shape)
        return row_count * column_count * element_size(self.dtype)

    def numpy(self) -> np.ndarray:
        """Returns a read-only 2D numpy view over ``buffer``.

        Float arrays are viewed as little-endian float32, string arrays as fixed width ``S<N>``
        (numpy strips the zero padding when items are read).
        """
        _check_uncompressed(self)
        if self.dtype == FLOAT32_DTYPE:
            np_dtype = FLOAT32_WIRE_DTYPE
        else:
            np_dtype = np.dtype(f"S{parse_string_itemsize(self.dtype)}")
        return _read_matrix(self, np_dtype)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": base64.b64encode(bytes(self.buffer)).decode("ascii"),
            "shape": list(self.shape),
            "dtype": self.dtype,
            "compressed": self.compressed,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "NdArray":
        data = d.get("data") or b""
        if isinstance(data, str):
            data = base64.b64decode(data, validate=True)
        return cls(
            buffer=bytes(data),
            shape=tuple(int(dim) for dim in d.get("shape") or ()),
            dtype=d["dtype"],
            compressed=bool(d.get("compressed", False)),
        )


def parse_string_itemsize(dtype: str) -> int:
    """Parses the per-element byte width out of a ``|S<N>`` dtype tag.

    Raises:
        DtypeMismatchError: If ``dtype`` is not a string dtype at all.
        MalformedDtypeError: If the width after ``|S`` is not a positive decimal integer.
    """
    if not isinstance(dtype, str) or not dtype.startswith(STRING_DTYPE_PREFIX):
        raise DtypeMismatchError(dtype, f"'{STRING_DTYPE_PREFIX}<N>'")
    match = _STRING_DTYPE_RE.fullmatch(dtype)
    if match is None:
        raise MalformedDtypeError(dtype)
    itemsize = int(match.group(1))
    if itemsize < 1:
        raise MalformedDtypeError(dtype)
    return itemsize


def element_size(dtype: str) -> int:
    if dtype == FLOAT32_DTYPE:
        return FLOAT32_WIRE_DTYPE.itemsize
    if isinstance(dtype, str) and dtype.startswith(STRING_DTYPE_PREFIX):
        return parse_string_itemsize(dtype)
    raise DtypeMismatchError(dtype, f"'{FLOAT32_DTYPE}' or '{STRING_DTYPE_PREFIX}<N>'")


def resolve_shape(shape: Sequence[int]) -> Tuple[int, int]:
    """Returns ``(row_count, column_count)`` for a 1D or 2D NdArray shape.

    A 1D shape describes a single row.

    Raises:
        InvalidShapeError: If the shape does not have 1 or 2 entries, or an entry is not an
            unsigned 32-bit integer.
    """
    shape = tuple(shape)
    if len(shape) not in (1, 2):
        raise InvalidShapeError(shape)
    for dim in shape:
        if (
            isinstance(dim, bool)
            or not isinstance(dim, (int, np.integer))
            or not 0 <= dim <= MAX_DIM_SIZE
        ):
            raise InvalidShapeError(
                shape, "Shape entries must be unsigned 32-bit integers."
            )
    if len(shape) == 1:
        return 1, int(shape[0])
    return int(shape[0]), int(shape[1])


def float_arr_to_ndarray(arr: Matrix) -> NdArray:
    """Packs a matrix of floats into a ``float32`` NdArray.

    Example:
        >>> float_arr_to_ndarray([[1.0, 2.0], [3.0, 4.0]]).shape
        (2, 2)
        >>> float_arr_to_ndarray([[5.5, 6.5]]).shape
        (2,)

    Args:
        arr: Non-empty sequence of equal-length rows. Values are rounded to float32.

    Returns:
        NdArray: Little-endian float32 elements in row-major order.

    Raises:
        EmptyArrayError: If ``arr`` has no rows.
        InconsistentRowsError: If the rows do not all have the same length.
    """
    row_count, column_count = _check_rows(arr)
    data = np.array(arr, dtype=FLOAT32_WIRE_DTYPE).reshape(row_count, column_count)
    return NdArray(
        buffer=data.tobytes(),
        shape=_shape_for(row_count, column_count),
        dtype=FLOAT32_DTYPE,
    )


def float_ndarray_to_arr(array: NdArray) -> List[List[float]]:
    """Unpacks a ``float32`` NdArray into a list of rows.

    Raises:
        DtypeMismatchError: If ``array.dtype`` is not ``"float32"``.
        BufferUnderflowError: If the buffer is shorter than the shape requires.
        BufferSizeMismatchError: If the buffer holds bytes past the declared shape.
    """
    _check_uncompressed(array)
    if array.dtype != FLOAT32_DTYPE:
        raise DtypeMismatchError(array.dtype, f"'{FLOAT32_DTYPE}'")
    return _read_matrix(array, FLOAT32_WIRE_DTYPE).tolist()


def string_arr_to_ndarray(arr: Matrix, itemsize: Optional[int] = None) -> NdArray:
    """Packs a matrix of strings into a fixed width ``|S<itemsize>`` NdArray.

    Every item is utf-8 encoded and right-padded with zero bytes to exactly ``itemsize`` bytes.
    ``bytes`` items are stored as they are.

    Args:
        arr: Non-empty sequence of equal-length rows of ``str`` or ``bytes``.
        itemsize (int, optional): Bytes per element. Defaults to the longest encoded item.

    Returns:
        NdArray: The packed matrix.

    Raises:
        EmptyArrayError: If ``arr`` has no rows.
        InconsistentRowsError: If the rows do not all have the same length.
        ItemTooLongError: If an item does not fit in ``itemsize`` bytes.
        MalformedDtypeError: If ``itemsize`` is not positive.
    """
    row_count, column_count = _check_rows(arr)
    encoded = [[_encode_item(item) for item in row] for row in arr]

    if itemsize is None:
        itemsize = max((len(raw) for row in encoded for raw in row), default=0) or 1
    elif itemsize < 1:
        raise MalformedDtypeError(f"{STRING_DTYPE_PREFIX}{itemsize}")

    for row, raw_row in zip(arr, encoded):
        for item, raw in zip(row, raw_row):
            if len(raw) > itemsize:
                raise ItemTooLongError(item, len(raw), itemsize)

    data = np.array(encoded, dtype=np.dtype(f"S{itemsize}")).reshape(
        row_count, column_count
    )
    return NdArray(
        buffer=data.tobytes(),
        shape=_shape_for(row_count, column_count),
        dtype=f"{STRING_DTYPE_PREFIX}{itemsize}",
    )


def string_ndarray_to_arr(array: NdArray) -> List[List[str]]:
    """Unpacks a ``|S<N>`` NdArray into a list of rows of strings.

    Trailing zero-byte padding is stripped from every item before it is decoded.

    Raises:
        DtypeMismatchError: If ``array.dtype`` does not start with ``|S``.
        MalformedDtypeError: If the width in ``array.dtype`` is not a positive integer.
        BufferUnderflowError: If the buffer is shorter than the shape requires.
        BufferSizeMismatchError: If the buffer holds bytes past the declared shape.
    """
    _check_uncompressed(array)
    itemsize = parse_string_itemsize(array.dtype)
    matrix = _read_matrix(array, np.dtype(f"S{itemsize}"))
    return [
        [raw.decode(STRING_ENCODING, STRING_ERRORS) for raw in row]
        for row in matrix.tolist()
    ]


def _check_rows(arr: Matrix) -> Tuple[int, int]:
    if isinstance(arr, np.ndarray) and arr.ndim != 2:
        raise InvalidShapeError(arr.shape, "Expected a 2D array.")
    if arr is None or len(arr) == 0:
        raise EmptyArrayError()

    for row in arr:
        # a row must itself be a sequence, a bare str or bytes is one item
        if not hasattr(row, "__len__") or isinstance(row, (str, bytes, bytearray)):
            raise InvalidShapeError((len(arr),), "Expected a 2D array.")

    column_count = len(arr[0])
    for i, row in enumerate(arr):
        if len(row) != column_count:
            raise InconsistentRowsError(i, len(row), column_count)
    return len(arr), column_count


def _shape_for(row_count: int, column_count: int) -> Tuple[int, ...]:
    shape = (column_count,) if row_count == 1 else (row_count, column_count)
    if any(dim > MAX_DIM_SIZE for dim in shape):
        raise InvalidShapeError(shape, "Shape entries must be unsigned 32-bit integers.")
    return shape


def _encode_item(item: Union[str, bytes]) -> bytes:
    if isinstance(item, (bytes, bytearray)):
        return bytes(item)
    return str(item).encode(STRING_ENCODING, STRING_ERRORS)


def _check_uncompressed(array: NdArray):
    if array.compressed:
        raise CompressedNdArrayError()


def _read_matrix(array: NdArray, np_dtype: np.dtype) -> np.ndarray:
    row_count, column_count = resolve_shape(array.shape)
    expected = row_count * column_count * np_dtype.itemsize
    actual = len(array.buffer)
    if actual < expected:
        raise BufferUnderflowError(expected, actual)
    if actual > expected:
        raise BufferSizeMismatchError(expected, actual)
    return np.frombuffer(array.buffer, dtype=np_dtype).reshape(row_count, column_count)
