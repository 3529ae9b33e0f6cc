"""Chat API - multi-tenant chat backend with JWT authentication and RBAC."""
