from vecadmin.client.auth.auth_context import AuthContext
from vecadmin.client.auth.client_credentials import ClientCredentialsAuthContext

__all__ = ["AuthContext", "ClientCredentialsAuthContext"]
