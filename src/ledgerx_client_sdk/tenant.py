from __future__ import annotations

PUBLIC_TENANT = "public"
TENANT_HEADER = "X-Tenant"

_LOCAL_HOSTS = {"localhost", "127.0.0.1"}


def resolve_tenant(hostname: str | None) -> str:
    """Derive the tenant schema from a subdomain.

    ``empresa.midominio.com`` -> ``empresa``; bare hosts, localhost and ``www``
    map to the public schema.
    """
    if not hostname:
        return PUBLIC_TENANT
    host = hostname.strip().lower().split(":", 1)[0]
    parts = host.split(".")
    if len(parts) == 1 or host in _LOCAL_HOSTS:
        return PUBLIC_TENANT
    if parts[0] == "www":
        return PUBLIC_TENANT
    return parts[0]


def tenant_headers(tenant: str | None) -> dict[str, str]:
    if not tenant or tenant == PUBLIC_TENANT:
        return {}
    return {TENANT_HEADER: tenant}
