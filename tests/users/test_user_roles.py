import pytest

from catering_personnel.core.enums import Role
from catering_personnel.users.model import User


@pytest.mark.parametrize(
    "roles,role,expected",
    [
        ({Role.OWNER}, Role.OWNER, True),
        ({Role.OWNER}, Role.ORGANIZER, True),
        ({Role.ORGANIZER}, Role.ORGANIZER, True),
        ({Role.ORGANIZER}, Role.OWNER, False),
        ({Role.COOK}, Role.ORGANIZER, False),
        ({Role.COOK}, Role.COOK, True),
    ],
)
def test_has_role_treats_owner_as_organizer(roles, role, expected):
    user = User(user_id=1, username="u", roles=frozenset(roles))

    assert user.has_role(role) is expected
