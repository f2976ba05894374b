from typing import Any, Dict, NamedTuple, Optional, Tuple


class Project(NamedTuple):
    id: str
    name: str
    organization_id: str
    max_pods: int = 0
    force_encryption_with_cmek: bool = False
    created_at: Optional[str] = None  # ISO 8601, as sent by the server

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Project":
        return cls(
            id=data["id"],
            name=data["name"],
            organization_id=data.get("organization_id", ""),
            max_pods=data.get("max_pods") or 0,
            force_encryption_with_cmek=bool(data.get("force_encryption_with_cmek")),
            created_at=data.get("created_at"),
        )


class Organization(NamedTuple):
    id: str
    name: str
    plan: str = ""
    payment_status: str = ""
    support_tier: str = ""
    created_at: Optional[str] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Organization":
        return cls(
            id=data["id"],
            name=data["name"],
            plan=data.get("plan", ""),
            payment_status=data.get("payment_status", ""),
            support_tier=data.get("support_tier", ""),
            created_at=data.get("created_at"),
        )


class ApiKey(NamedTuple):
    id: str
    name: str
    project_id: str
    roles: Tuple[str, ...] = ()

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ApiKey":
        return cls(
            id=data["id"],
            name=data["name"],
            project_id=data["project_id"],
            roles=tuple(data.get("roles") or ()),
        )


class ApiKeyWithSecret(NamedTuple):
    key: ApiKey
    # the full secret, only returned when the key is created
    value: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ApiKeyWithSecret":
        return cls(key=ApiKey.from_json(data["key"]), value=data["value"])
