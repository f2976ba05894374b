ADMIN_REST_ENDPOINT = "https://api.pinecone.io"
ADMIN_REST_ENDPOINT_LOCAL = "http://localhost:5080"
ADMIN_AUTH_ENDPOINT = "https://login.pinecone.io"
USE_LOCAL_HOST = False

API_VERSION = "2025-04"
API_VERSION_HEADER = "X-Pinecone-Api-Version"
USER_AGENT_NAME = "vecadmin"

GET_TOKEN_SUFFIX = "/oauth/token"
TOKEN_AUDIENCE = "https://api.pinecone.io/"
TOKEN_GRANT_TYPE = "client_credentials"

PROJECTS_SUFFIX = "/admin/projects"
PROJECT_SUFFIX = "/admin/projects/{}"
ORGANIZATIONS_SUFFIX = "/admin/organizations"
ORGANIZATION_SUFFIX = "/admin/organizations/{}"
PROJECT_API_KEYS_SUFFIX = "/admin/projects/{}/api-keys"
API_KEY_SUFFIX = "/admin/api-keys/{}"

DEFAULT_REQUEST_TIMEOUT = 170

CLIENT_ID_ENV = "PINECONE_CLIENT_ID"
CLIENT_SECRET_ENV = "PINECONE_CLIENT_SECRET"
ADDITIONAL_HEADERS_ENV = "PINECONE_ADDITIONAL_HEADERS"
# refresh tokens this many seconds before their `exp` claim
TOKEN_EXPIRY_LEEWAY = 30
