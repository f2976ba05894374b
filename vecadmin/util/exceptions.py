from typing import Any, Optional, Sequence


# Exceptions raised while converting between matrices and NdArrays
class NdArrayError(ValueError):
    pass


class DtypeMismatchError(NdArrayError):
    def __init__(self, dtype: str, expected: str):
        super().__init__(
            f"Unexpected dtype '{dtype}'. Expected an NdArray with dtype {expected}."
        )
        self.dtype = dtype
        self.expected = expected


class MalformedDtypeError(NdArrayError):
    def __init__(self, dtype: str):
        super().__init__(
            f"Dtype '{dtype}' is malformed. String dtypes must be of the form '|S<N>' where N is a positive integer."
        )
        self.dtype = dtype


class InvalidShapeError(NdArrayError):
    def __init__(self, shape: Sequence[Any], message: Optional[str] = None):
        message = message or "NdArray shape must have exactly 1 or 2 dimensions."
        super().__init__(f"{message} Got shape={tuple(shape)}.")
        self.shape = tuple(shape)


class BufferSizeMismatchError(NdArrayError):
    def __init__(self, expected: int, actual: int, message: Optional[str] = None):
        message = message or "NdArray buffer does not match its shape and dtype."
        super().__init__(f"{message} Expected {expected} bytes, got {actual}.")
        self.expected = expected
        self.actual = actual


class BufferUnderflowError(BufferSizeMismatchError):
    def __init__(self, expected: int, actual: int):
        super().__init__(
            expected,
            actual,
            "NdArray buffer is too short to fill the declared shape.",
        )


class EmptyArrayError(NdArrayError):
    def __init__(self):
        super().__init__("Cannot convert an empty array. At least one row is required.")


class InconsistentRowsError(NdArrayError):
    def __init__(self, row_index: int, length: int, expected: int):
        super().__init__(
            f"All rows must have the same length. Row {row_index} has {length} elements, expected {expected}."
        )
        self.row_index = row_index


class ItemTooLongError(NdArrayError):
    def __init__(self, item: str, size: int, itemsize: int):
        super().__init__(
            f"Item {item!r} is {size} bytes long and does not fit in an itemsize of {itemsize}."
        )


class CompressedNdArrayError(NdArrayError):
    def __init__(self):
        super().__init__(
            "Compressed NdArrays are not supported. Request the array uncompressed."
        )


# Exceptions encountered while building the admin client
class MissingCredentialsError(Exception):
    def __init__(self, name: str, env_var: str):
        super().__init__(
            f"No {name} provided. Pass `{name}` to the AdminClient or set the {env_var} environment variable."
        )


class InvalidIdentifierError(ValueError):
    def __init__(self, name: str, value: Any):
        super().__init__(f"Invalid {name} '{value}'. Expected a UUID.")


class LoginException(Exception):
    def __init__(
        self,
        message="Error while retrieving an access token, check the client id and secret.",
    ):
        super().__init__(message)


class InvalidTokenException(Exception):
    def __init__(self, message="The access token is empty or invalid."):
        super().__init__(message)


# Exceptions encountered while interacting with the admin API
class AuthenticationException(Exception):
    def __init__(self, message="Authentication failed. Check the client credentials."):
        super().__init__(message)


class AuthorizationException(Exception):
    def __init__(
        self,
        message="You are not authorized to access this resource.",
        response=None,
    ):
        self.response = response
        super().__init__(message)


class ResourceNotFoundException(Exception):
    def __init__(
        self,
        message="The resource you are looking for was not found. Check if the id is correct.",
    ):
        super().__init__(message)


class ResourceConflictException(Exception):
    def __init__(self, message="The resource already exists."):
        super().__init__(message)


class BadRequestException(Exception):
    def __init__(self, message):
        message = (
            f"Invalid Request. One or more request parameters is incorrect.\n{message}"
        )
        super().__init__(message)


class UnprocessableEntityException(Exception):
    def __init__(self, message):
        super().__init__(f"The request could not be processed.\n{message}")


class OverLimitException(Exception):
    def __init__(
        self,
        message="You are over the allowed limits for this operation.",
    ):
        super().__init__(message)


class ServerException(Exception):
    def __init__(self, message="Internal server error."):
        super().__init__(message)


class BadGatewayException(Exception):
    def __init__(self, message="Invalid response from the admin API."):
        super().__init__(message)


class GatewayTimeoutException(Exception):
    def __init__(self, message="The admin API took too long to respond."):
        super().__init__(message)


class UnexpectedStatusCodeException(Exception):
    def __init__(self, message):
        super().__init__(message)
