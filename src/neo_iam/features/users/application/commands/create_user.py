"""Create a user."""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .....core.exceptions import DuplicateNameError
from .....core.value_objects import Email, OrganizationId, TenantId
from ....permissions.application import CommandResult, PostCommitSteps
from ...entities import User, UserRepository

logger = logging.getLogger(__name__)


@dataclass
class CreateUserCommand:
    """``password_hash`` must already be hashed by the authentication layer."""

    email: str
    password_hash: str
    first_name: str
    last_name: str
    tenant_id: Optional[Union[str, TenantId]] = None
    organization_id: Optional[Union[str, OrganizationId]] = None


class CreateUser:
    """Command handler registering a user with a unique email."""

    def __init__(self, user_repository: UserRepository, post_commit: PostCommitSteps):
        self._users = user_repository
        self._post_commit = post_commit

    async def execute(self, command: CreateUserCommand) -> CommandResult:
        email = Email(command.email)
        user = User.create(
            email=email,
            password_hash=command.password_hash,
            first_name=command.first_name,
            last_name=command.last_name,
            tenant_id=TenantId.coerce(command.tenant_id) if command.tenant_id is not None else None,
            organization_id=(
                OrganizationId.coerce(command.organization_id)
                if command.organization_id is not None
                else None
            ),
        )

        if await self._users.find_by_email(email) is not None:
            raise DuplicateNameError(
                f"User with email {email} already exists", details={"email": str(email)}
            )

        await self._users.save(user)

        result = CommandResult(data=user)
        await self._post_commit.publish_pending(result, user)
        logger.info(f"Created user {user.id}")
        return result
