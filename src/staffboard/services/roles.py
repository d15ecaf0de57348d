"""Role normalization for the portal's job-title style role strings.

Users carry titles such as ``Engineering Director`` or ``talent_acquisition_manager``;
notification delivery only distinguishes three recipient roles.
"""

from staffboard.errors.exceptions import AuthorizationError
from staffboard.models.enums import Role

ROLE_ALIASES: dict[str, Role] = {
    # directors
    "director": Role.DIRECTOR,
    "director_hr": Role.DIRECTOR,
    "global_hr_director": Role.DIRECTOR,
    "global_operations_director": Role.DIRECTOR,
    "engineering_director": Role.DIRECTOR,
    "director_tech_team": Role.DIRECTOR,
    "director_business_development": Role.DIRECTOR,
    # managers
    "manager": Role.MANAGER,
    "talent_acquisition_manager": Role.MANAGER,
    "project_tech_manager": Role.MANAGER,
    "quality_assurance_manager": Role.MANAGER,
    "software_development_manager": Role.MANAGER,
    "systems_integration_manager": Role.MANAGER,
    "client_relations_manager": Role.MANAGER,
    # employees
    "employee": Role.EMPLOYEE,
    "senior_employee": Role.EMPLOYEE,
    "intern": Role.EMPLOYEE,
    "team_lead": Role.EMPLOYEE,
}


def role_key(raw_role: str) -> str:
    return raw_role.strip().lower().replace(" ", "_").replace("-", "_")


def normalize_role(raw_role: str | None) -> Role:
    """Map a raw role/title string to a recipient role.

    Raises:
        AuthorizationError: the string is empty or not a known role.
    """
    if not raw_role:
        raise AuthorizationError("Invalid user role")
    try:
        return ROLE_ALIASES[role_key(raw_role)]
    except KeyError:
        raise AuthorizationError(f"Invalid user role '{raw_role}'") from None
