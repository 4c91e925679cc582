"""Errors raised while compiling a blueprint.

Every error is fatal: the compile stops and no partial blueprint is returned.
"""


class BlueprintError(Exception):
    """Base exception for all blueprint compile errors."""
    pass


class UnresolvedNameError(BlueprintError):
    """Raised when a route or namespace name cannot be derived from a path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Could not resolve name for route at {path}")


class MissingOperationError(BlueprintError):
    """Raised when a path has no POST operation."""

    def __init__(self, path: str, methods: list[str]):
        self.path = path
        self.methods = methods
        declared = ", ".join(methods) or "none"
        super().__init__(f"POST method is missing for {path} (declared: {declared})")


class ResponseKeyError(BlueprintError):
    """Raised when x-response-key is missing or does not match the response schema."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{message} for {path}")


class RoutePathError(BlueprintError):
    """Raised when a resource points at a route that does not exist."""

    def __init__(self, resource_type: str, route_path: str):
        self.resource_type = resource_type
        self.route_path = route_path
        super().__init__(
            f"Route path '{route_path}' not found in routes for resource {resource_type}"
        )


class GroupKeyError(BlueprintError):
    """Raised when a property or variant references an undeclared group."""

    def __init__(self, kind: str, key: str, name: str, path: str):
        self.kind = kind
        self.key = key
        self.name = name
        self.path = path
        super().__init__(
            f"{kind.capitalize()} group key '{key}' for {name} is not declared "
            f"in x-{kind}-groups of {path}"
        )


class DiscriminatorError(BlueprintError):
    """Raised when a discriminated array lacks a discriminator property name."""

    def __init__(self, name: str, path: str):
        self.name = name
        self.path = path
        super().__init__(f"Missing discriminator property name for {name} in {path}")


class EnumDefinitionError(BlueprintError):
    """Raised when an enum literal has no entry in a present x-enums table."""

    def __init__(self, value: str, name: str, path: str):
        self.value = value
        self.name = name
        self.path = path
        super().__init__(
            f'Missing enum value definition in x-enums for "{value}" '
            f"of {name} in {path}"
        )


class ActionAttemptTypeError(BlueprintError):
    """Raised when an action attempt response has a missing or unknown type."""

    def __init__(self, path: str, action_attempt_type: str | None):
        self.path = path
        self.action_attempt_type = action_attempt_type
        if action_attempt_type is None:
            message = f"Missing action attempt type for {path}"
        else:
            message = f"Invalid action attempt type '{action_attempt_type}' for {path}"
        super().__init__(message)


class UnsupportedTypeError(BlueprintError):
    """Raised when a schema node declares a type outside the supported set."""

    def __init__(self, type_name: str, name: str, path: str):
        self.type_name = type_name
        self.name = name
        self.path = path
        super().__init__(f"Unsupported property type '{type_name}' for {name} in {path}")


class SampleRenderError(BlueprintError):
    """Raised when a code or resource sample cannot be rendered."""
    pass
