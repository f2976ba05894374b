import json
import os
import re
import uuid
from typing import Dict, Optional

import requests  # type: ignore

import vecadmin
from vecadmin.client.config import ADDITIONAL_HEADERS_ENV, USER_AGENT_NAME
from vecadmin.client.log import logger
from vecadmin.util.exceptions import (
    AuthenticationException,
    AuthorizationException,
    BadGatewayException,
    BadRequestException,
    GatewayTimeoutException,
    InvalidIdentifierError,
    OverLimitException,
    ResourceConflictException,
    ResourceNotFoundException,
    ServerException,
    UnexpectedStatusCodeException,
    UnprocessableEntityException,
)


def get_error_message(response: requests.Response) -> Optional[str]:
    """Extracts the server's error message, either ``message`` or ``error.message``."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    return body.get("message")


def check_response_status(response: requests.Response):
    """Check response status and throw corresponding exception on failure."""
    code = response.status_code
    if code >= 200 and code < 300:
        return

    message = get_error_message(response)

    if code == 400:
        raise BadRequestException(message or " ")
    elif code == 401:
        if message:
            raise AuthenticationException(message)
        raise AuthenticationException
    elif code == 403:
        if message:
            raise AuthorizationException(message, response=response)
        raise AuthorizationException(response=response)
    elif code == 404:
        if message:
            raise ResourceNotFoundException(message)
        raise ResourceNotFoundException
    elif code == 409:
        if message:
            raise ResourceConflictException(message)
        raise ResourceConflictException
    elif code == 422:
        raise UnprocessableEntityException(message or " ")
    elif code == 429:
        raise OverLimitException
    elif code == 502:
        raise BadGatewayException
    elif code == 504:
        raise GatewayTimeoutException
    elif 500 <= code < 600:
        raise ServerException(message or "Server under maintenance, try again later.")
    else:
        message = f"An error occurred. Server response: {code}"
        raise UnexpectedStatusCodeException(message)


def build_source_tag(source_tag: str) -> str:
    """Normalizes a source tag: lowercase, only ``[a-z0-9_ :]``, whitespace runs collapsed into ``_``."""
    source_tag = re.sub(r"[^a-z0-9_ :]", "", source_tag.lower())
    return "_".join(source_tag.split())


def build_user_agent(source_tag: Optional[str] = None) -> str:
    user_agent = f"{USER_AGENT_NAME}/{vecadmin.__version__}"
    if source_tag:
        user_agent += f"; source_tag={build_source_tag(source_tag)};"
    return user_agent


def read_additional_headers(headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Returns the headers from the environment, overridden by ``headers``."""
    additional_headers: Dict[str, str] = {}
    env_headers = os.environ.get(ADDITIONAL_HEADERS_ENV)
    if env_headers:
        try:
            parsed = json.loads(env_headers)
        except ValueError as e:
            logger.warning(f"Failed to parse {ADDITIONAL_HEADERS_ENV}: {e}")
        else:
            if isinstance(parsed, dict):
                additional_headers.update({k: str(v) for k, v in parsed.items()})
            else:
                logger.warning(
                    f"Ignoring {ADDITIONAL_HEADERS_ENV}, expected a JSON object."
                )
    additional_headers.update(headers or {})
    return additional_headers


def validate_id(value: str, name: str) -> str:
    try:
        return str(uuid.UUID(str(value)))
    except ValueError:
        raise InvalidIdentifierError(name, value)
