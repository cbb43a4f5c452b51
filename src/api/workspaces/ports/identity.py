"""Identity-provider port.

Each workspace is mirrored by a group in the identity provider; workspace
access is governed by membership of that group.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IIdentityProviderClient(Protocol):
    """Manages groups and group membership in the identity provider."""

    async def create_group(self, name: str) -> str:
        """Create a group.

        Args:
            name: Group name

        Returns:
            The identity provider's id for the new group

        Raises:
            GroupAlreadyExistsError: If a group with this name exists
            IdentityProviderError: On any other failure
        """
        ...

    async def delete_group(self, group_id: str) -> None:
        """Delete a group.

        Raises:
            GroupNotFoundError: If the group does not exist
            IdentityProviderError: On any other failure
        """
        ...

    async def add_user_to_group(self, user_id: str, group_id: str) -> None:
        """Add a user to a group.

        Raises:
            UserNotFoundError: If the user does not exist
            GroupNotFoundError: If the group does not exist
            IdentityProviderError: On any other failure
        """
        ...

    async def remove_user_from_group(self, user_id: str, group_id: str) -> None:
        ...
