import os
from typing import Any, Callable, Dict, List, Optional

import requests  # type: ignore

import vecadmin
import vecadmin.client.config
from vecadmin.client.auth import ClientCredentialsAuthContext
from vecadmin.client.config import (
    ADMIN_AUTH_ENDPOINT,
    ADMIN_REST_ENDPOINT,
    ADMIN_REST_ENDPOINT_LOCAL,
    API_KEY_SUFFIX,
    API_VERSION,
    API_VERSION_HEADER,
    CLIENT_ID_ENV,
    CLIENT_SECRET_ENV,
    DEFAULT_REQUEST_TIMEOUT,
    GET_TOKEN_SUFFIX,
    ORGANIZATION_SUFFIX,
    ORGANIZATIONS_SUFFIX,
    PROJECT_API_KEYS_SUFFIX,
    PROJECT_SUFFIX,
    PROJECTS_SUFFIX,
    TOKEN_AUDIENCE,
    TOKEN_GRANT_TYPE,
)
from vecadmin.client.log import logger
from vecadmin.client.models import ApiKey, ApiKeyWithSecret, Organization, Project
from vecadmin.client.utils import (
    build_user_agent,
    check_response_status,
    read_additional_headers,
    validate_id,
)
from vecadmin.util.exceptions import LoginException, MissingCredentialsError

# for these codes, we will retry requests upto 3 times
retry_status_codes = {502}


class AdminBackendClient:
    """Communicates with the admin API"""

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        session: Optional[requests.Session] = None,
        token_fetcher: Optional[Callable[[str, str], str]] = None,
        source_tag: Optional[str] = None,
        endpoint: Optional[str] = None,
        auth_endpoint: Optional[str] = None,
    ):
        """
        Args:
            client_id (str, optional): Service account client id. Defaults to the `PINECONE_CLIENT_ID`
                environment variable.
            client_secret (str, optional): Service account client secret. Defaults to the
                `PINECONE_CLIENT_SECRET` environment variable.
            headers (dict, optional): Extra headers sent with every request. They override the ones
                found in the `PINECONE_ADDITIONAL_HEADERS` environment variable.
            session (requests.Session, optional): Transport used for every request.
            token_fetcher (callable, optional): Called as `token_fetcher(client_id, client_secret)` to
                get an access token. Defaults to the OAuth client credentials flow.
            source_tag (str, optional): Tag appended to the `User-Agent` header.
            endpoint (str, optional): Base url of the admin API.
            auth_endpoint (str, optional): Base url of the token server.

        Raises:
            MissingCredentialsError: If the client id or secret is neither passed nor set in the environment.
        """
        self.version = vecadmin.__version__
        self.client_id = client_id or os.environ.get(CLIENT_ID_ENV)
        self.client_secret = client_secret or os.environ.get(CLIENT_SECRET_ENV)
        if not self.client_id:
            raise MissingCredentialsError("client_id", CLIENT_ID_ENV)
        if not self.client_secret:
            raise MissingCredentialsError("client_secret", CLIENT_SECRET_ENV)

        self.session = session or requests.Session()
        self._endpoint = endpoint
        self.auth_endpoint = auth_endpoint or ADMIN_AUTH_ENDPOINT
        self.user_agent = build_user_agent(source_tag)
        self.additional_headers = read_additional_headers(headers)
        self.auth_context = ClientCredentialsAuthContext(
            self.client_id,
            self.client_secret,
            token_fetcher or self.request_auth_token,
        )

    def request(
        self,
        method: str,
        relative_url: str,
        endpoint: Optional[str] = None,
        params: Optional[dict] = None,
        json: Optional[dict] = None,
        headers: Optional[dict] = None,
        timeout: Optional[int] = DEFAULT_REQUEST_TIMEOUT,
        authenticated: bool = True,
    ):
        """Sends a request to the admin API.

        Args:
            method (str): The method for sending the request. Should be one of 'GET', 'POST', 'PATCH' or 'DELETE'.
            relative_url (str): The suffix to be appended to the end of the endpoint url.
            endpoint(str, optional): The endpoint to send the request to.
            params (dict, optional): Dictionary to send in the query string for the request.
            json (dict, optional): A JSON serializable Python object to send in the body of the request.
            headers (dict, optional): Dictionary of HTTP Headers to send with the request.
            timeout (float,optional): How many seconds to wait for the server to send data before giving up.
            authenticated (bool): Whether to attach the bearer token. Only the token request itself skips it.

        Returns:
            requests.Response: The response received from the server.
        """
        params = params or {}
        endpoint = endpoint or self.endpoint()
        endpoint = endpoint.strip("/")
        relative_url = relative_url.strip("/")
        request_url = f"{endpoint}/{relative_url}"

        request_headers = {
            "User-Agent": self.user_agent,
            API_VERSION_HEADER: API_VERSION,
        }
        request_headers.update(self.additional_headers)
        request_headers.update(headers or {})
        if authenticated:
            request_headers.update(self.auth_context.get_auth_headers())

        status_code = None
        tries = 0
        while status_code is None or (status_code in retry_status_codes and tries < 3):
            logger.debug(f"{method} {request_url}")
            response = self.session.request(
                method,
                request_url,
                params=params,
                json=json,
                headers=request_headers,
                timeout=timeout,
            )
            status_code = response.status_code
            tries += 1
        check_response_status(response)
        return response

    def endpoint(self):
        if self._endpoint:
            return self._endpoint
        if vecadmin.client.config.USE_LOCAL_HOST:
            return ADMIN_REST_ENDPOINT_LOCAL

        return ADMIN_REST_ENDPOINT

    def request_auth_token(self, client_id: str, client_secret: str) -> str:
        """Exchanges the client credentials for an access token.

        Args:
            client_id (str): The service account client id.
            client_secret (str): The service account client secret.

        Returns:
            str: The access token.

        Raises:
            LoginException: If the token server response does not contain a token.
        """
        json = {
            "client_id": client_id,
            "client_secret": client_secret,
            "grant_type": TOKEN_GRANT_TYPE,
            "audience": TOKEN_AUDIENCE,
        }
        response = self.request(
            "POST",
            GET_TOKEN_SUFFIX,
            endpoint=self.auth_endpoint,
            json=json,
            authenticated=False,
        )

        try:
            token = response.json()["access_token"]
        except (ValueError, KeyError, TypeError) as e:
            raise LoginException() from e
        return token


def _list_data(response: requests.Response) -> List[Dict[str, Any]]:
    return response.json().get("data") or []


class ProjectClient:
    def __init__(self, client: AdminBackendClient):
        self.client = client

    def create(
        self,
        name: str,
        max_pods: Optional[int] = None,
        force_encryption_with_cmek: Optional[bool] = None,
    ) -> Project:
        """Creates a project.

        Args:
            name (str): The name of the new project.
            max_pods (int, optional): The maximum number of pods in the project. The server defaults to 0.
            force_encryption_with_cmek (bool, optional): Whether to force encryption with a customer-managed key.

        Returns:
            Project: The created project.
        """
        json: Dict[str, Any] = {"name": name}
        if max_pods is not None:
            json["max_pods"] = max_pods
        if force_encryption_with_cmek is not None:
            json["force_encryption_with_cmek"] = force_encryption_with_cmek
        response = self.client.request("POST", PROJECTS_SUFFIX, json=json)
        return Project.from_json(response.json())

    def update(
        self,
        project_id: str,
        name: Optional[str] = None,
        max_pods: Optional[int] = None,
        force_encryption_with_cmek: Optional[bool] = None,
    ) -> Project:
        """Updates the given fields of a project. Fields left as None are not changed."""
        project_id = validate_id(project_id, "project_id")
        json: Dict[str, Any] = {}
        if name is not None:
            json["name"] = name
        if max_pods is not None:
            json["max_pods"] = max_pods
        if force_encryption_with_cmek is not None:
            json["force_encryption_with_cmek"] = force_encryption_with_cmek
        response = self.client.request(
            "PATCH", PROJECT_SUFFIX.format(project_id), json=json
        )
        return Project.from_json(response.json())

    def list(self) -> List[Project]:
        response = self.client.request("GET", PROJECTS_SUFFIX)
        return [Project.from_json(project) for project in _list_data(response)]

    def describe(self, project_id: str) -> Project:
        project_id = validate_id(project_id, "project_id")
        response = self.client.request("GET", PROJECT_SUFFIX.format(project_id))
        return Project.from_json(response.json())

    def delete(self, project_id: str):
        project_id = validate_id(project_id, "project_id")
        self.client.request("DELETE", PROJECT_SUFFIX.format(project_id))


class OrganizationClient:
    def __init__(self, client: AdminBackendClient):
        self.client = client

    def list(self) -> List[Organization]:
        response = self.client.request("GET", ORGANIZATIONS_SUFFIX)
        return [Organization.from_json(org) for org in _list_data(response)]

    def describe(self, organization_id: str) -> Organization:
        response = self.client.request(
            "GET", ORGANIZATION_SUFFIX.format(organization_id)
        )
        return Organization.from_json(response.json())

    def update(self, organization_id: str, name: Optional[str] = None) -> Organization:
        # name is always sent, as null when unset
        response = self.client.request(
            "PATCH", ORGANIZATION_SUFFIX.format(organization_id), json={"name": name}
        )
        return Organization.from_json(response.json())

    def delete(self, organization_id: str):
        self.client.request("DELETE", ORGANIZATION_SUFFIX.format(organization_id))


class ApiKeyClient:
    def __init__(self, client: AdminBackendClient):
        self.client = client

    def create(
        self, project_id: str, name: str, roles: Optional[List[str]] = None
    ) -> ApiKeyWithSecret:
        """Creates an API key in a project.

        Args:
            project_id (str): The project the key belongs to.
            name (str): The name of the key, 1-80 characters.
            roles (list, optional): Roles of the key. The server defaults to `["ProjectEditor"]`.

        Returns:
            ApiKeyWithSecret: The key together with its secret value, which is not retrievable later.
        """
        project_id = validate_id(project_id, "project_id")
        json: Dict[str, Any] = {"name": name}
        if roles is not None:
            json["roles"] = list(roles)
        response = self.client.request(
            "POST", PROJECT_API_KEYS_SUFFIX.format(project_id), json=json
        )
        return ApiKeyWithSecret.from_json(response.json())

    def update(
        self,
        api_key_id: str,
        name: Optional[str] = None,
        roles: Optional[List[str]] = None,
    ) -> ApiKey:
        """Updates an API key. When `roles` is given it replaces the existing roles."""
        api_key_id = validate_id(api_key_id, "api_key_id")
        json: Dict[str, Any] = {}
        if name is not None:
            json["name"] = name
        if roles is not None:
            json["roles"] = list(roles)
        response = self.client.request(
            "PATCH", API_KEY_SUFFIX.format(api_key_id), json=json
        )
        return ApiKey.from_json(response.json())

    def list(self, project_id: str) -> List[ApiKey]:
        project_id = validate_id(project_id, "project_id")
        response = self.client.request("GET", PROJECT_API_KEYS_SUFFIX.format(project_id))
        return [ApiKey.from_json(key) for key in _list_data(response)]

    def describe(self, api_key_id: str) -> ApiKey:
        api_key_id = validate_id(api_key_id, "api_key_id")
        response = self.client.request("GET", API_KEY_SUFFIX.format(api_key_id))
        return ApiKey.from_json(response.json())

    def delete(self, api_key_id: str):
        api_key_id = validate_id(api_key_id, "api_key_id")
        self.client.request("DELETE", API_KEY_SUFFIX.format(api_key_id))


class AdminClient(AdminBackendClient):
    """Manages projects, organizations and API keys.

    Example:
        >>> client = AdminClient(client_id="...", client_secret="...")
        >>> project = client.projects.create("my-project")
        >>> key = client.api_keys.create(project.id, "ci")
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.projects = ProjectClient(self)
        self.organizations = OrganizationClient(self)
        self.api_keys = ApiKeyClient(self)
