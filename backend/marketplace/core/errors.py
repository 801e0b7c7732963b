class BrokenRoleReferenceError(Exception):
    """A user's role_id does not resolve to an existing role.

    This is a data-integrity failure, not a business outcome, so permission
    queries raise it instead of defaulting to "no permission".
    """

    def __init__(self, user_id, role_id):
        self.user_id = user_id
        self.role_id = role_id
        super().__init__(f"User {user_id} references missing role {role_id}")


class RoleNotFoundError(LookupError):
    """No role with the requested name exists in the registry"""

    def __init__(self, role_name: str):
        self.role_name = role_name
        super().__init__(f"Role '{role_name}' not found")


class UnknownLocationError(LookupError):
    """A country, state or city id given for a user does not exist"""

    def __init__(self, kind: str, location_id: int):
        self.kind = kind
        self.location_id = location_id
        super().__init__(f"Unknown {kind} {location_id}")
