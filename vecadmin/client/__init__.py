from vecadmin.client.client import AdminClient, AdminBackendClient

__all__ = ["AdminClient", "AdminBackendClient"]
