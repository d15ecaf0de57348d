"""Tests for role normalization."""

import pytest

from staffboard.errors.exceptions import AuthorizationError
from staffboard.models.enums import Role
from staffboard.services.roles import normalize_role


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("employee", Role.EMPLOYEE),
        ("Intern", Role.EMPLOYEE),
        ("team lead", Role.EMPLOYEE),
        ("manager", Role.MANAGER),
        ("Talent Acquisition Manager", Role.MANAGER),
        ("project-tech-manager", Role.MANAGER),
        ("Engineering Director", Role.DIRECTOR),
        ("director_hr", Role.DIRECTOR),
    ],
)
def test_known_titles_map_to_recipient_roles(raw, expected):
    assert normalize_role(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "ceo", "janitor"])
def test_unknown_roles_are_rejected(raw):
    with pytest.raises(AuthorizationError):
        normalize_role(raw)
