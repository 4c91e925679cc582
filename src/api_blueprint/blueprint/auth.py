"""Auth method mapping and workspace scope classification."""

from api_blueprint.blueprint.models import AuthMethod, WorkspaceScope

AUTH_METHODS: dict[str, AuthMethod] = {
    "api_key": "api_key",
    "pat_with_workspace": "personal_access_token",
    "pat_without_workspace": "personal_access_token",
    "console_session_token_with_workspace": "console_session_token",
    "console_session_token_without_workspace": "console_session_token",
    "client_session": "client_session_token",
    "client_session_with_customer": "client_session_token",
    "publishable_key": "publishable_key",
}

WORKSPACE_FREE = {"pat_without_workspace", "console_session_token_without_workspace"}


def security_schemes(security: list[dict]) -> list[str]:
    """Scheme names of an operation's security requirements, first key of each."""
    return [next(iter(requirement)) for requirement in security if requirement]


def map_auth_methods(schemes: list[str]) -> list[AuthMethod]:
    """Map OpenAPI scheme names to auth methods, dropping unknown ones."""
    methods: list[AuthMethod] = []
    for scheme in schemes:
        method = AUTH_METHODS.get(scheme)
        if method is not None and method not in methods:
            methods.append(method)
    return methods


def get_workspace_scope(schemes: list[str]) -> WorkspaceScope:
    known = [scheme for scheme in schemes if scheme in AUTH_METHODS]
    with_workspace = any(scheme not in WORKSPACE_FREE for scheme in known)
    without_workspace = any(scheme in WORKSPACE_FREE for scheme in known)

    if with_workspace and without_workspace:
        return "optional"
    if with_workspace:
        return "required"
    return "none"
