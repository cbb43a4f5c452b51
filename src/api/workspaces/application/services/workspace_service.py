"""Workspace application service.

Orchestrates workspace lifecycle operations that span this system and the
external identity provider. There is no distributed transaction: when a
step fails after the identity-provider group was created, the service
undoes what it can (compensation) and records anything it could not undo.
"""

from __future__ import annotations

from shared_kernel.errors import (
    DomainError,
    InvalidInputError,
    PersistenceError,
    operation_context,
)
from shared_kernel.events import EventDispatcher, IEventPublisher
from shared_kernel.events.observability import EventDispatchProbe
from shared_kernel.execution_context import ensure_active
from shared_kernel.observability_context import ObservationContext
from shared_kernel.validation import (
    max_length,
    non_negative,
    required,
    required_id,
    value_in_range,
)
from workspaces.application.authorization import require_member
from workspaces.application.commands import (
    CreateWorkspaceCommand,
    DeleteWorkspaceCommand,
    UpdateWorkspaceCommand,
)
from workspaces.application.observability import (
    DefaultWorkspaceServiceProbe,
    WorkspaceServiceProbe,
)
from workspaces.application.queries import (
    MAX_PAGE_SIZE,
    GetWorkspaceQuery,
    ListUserWorkspacesQuery,
    WorkspaceList,
)
from workspaces.domain.aggregates import Workspace
from workspaces.domain.value_objects import (
    MAX_WORKSPACE_NAME_LENGTH,
    Member,
    Role,
    WorkspaceId,
)
from workspaces.ports.exceptions import (
    GroupNotFoundError,
    KeycloakGroupCreationFailedError,
    KeycloakGroupDeletionFailedError,
    NotWorkspaceAdminError,
    WorkspaceNotFoundError,
)
from workspaces.ports.identity import IIdentityProviderClient
from workspaces.ports.repositories import IWorkspaceRepository


def _validate_name(name: str) -> None:
    required("name", name)
    max_length("name", name, MAX_WORKSPACE_NAME_LENGTH)


class WorkspaceService:
    """Application service for workspace management.

    Each operation checks cancellation first, then validates input, loads
    the workspace, applies the change through the aggregate, saves once
    and publishes the recorded events best effort.
    """

    def __init__(
        self,
        workspace_repository: IWorkspaceRepository,
        identity_client: IIdentityProviderClient,
        event_publisher: IEventPublisher,
        probe: WorkspaceServiceProbe | None = None,
        dispatch_probe: EventDispatchProbe | None = None,
    ):
        """Initialize WorkspaceService with dependencies.

        Args:
            workspace_repository: Repository for workspaces and memberships
            identity_client: Client for the identity provider's groups
            event_publisher: Publisher for workspace events
            probe: Optional domain probe for observability
            dispatch_probe: Optional probe for event publication outcomes
        """
        self._workspace_repository = workspace_repository
        self._identity_client = identity_client
        self._dispatcher = EventDispatcher(event_publisher, probe=dispatch_probe)
        self._probe = probe or DefaultWorkspaceServiceProbe()

    def _observed_probe(self) -> WorkspaceServiceProbe:
        context = ensure_active()
        return self._probe.with_context(
            ObservationContext.from_execution_context(context)
        )

    async def _load(self, workspace_id: WorkspaceId) -> Workspace:
        with operation_context("failed to load workspace"):
            workspace = await self._workspace_repository.get_by_id(workspace_id)
        if workspace is None:
            raise WorkspaceNotFoundError()
        return workspace

    async def create_workspace(self, command: CreateWorkspaceCommand) -> Workspace:
        """Create a workspace backed by a new identity-provider group.

        Sequence:
        1. Create the identity-provider group
        2. Create and save the workspace
        3. Record the creator as the workspace owner
        4. Add the creator to the group (best effort)

        If step 2 or 3 fails, the group is deleted again (and, for step 3,
        the saved workspace too) before the error is raised.

        Args:
            command: Name, description and creating user

        Returns:
            The created Workspace

        Raises:
            InvalidInputError: If the command is invalid
            KeycloakGroupCreationFailedError: If the group could not be created
        """
        probe = self._observed_probe()
        try:
            _validate_name(command.name)
            required_id("created_by", command.created_by)
        except InvalidInputError as e:
            probe.operation_failed(operation="create_workspace", error=str(e))
            raise e.with_context("validation failed")

        try:
            group_id = await self._identity_client.create_group(command.name)
        except Exception as e:
            probe.workspace_creation_failed(name=command.name, error=str(e))
            raise KeycloakGroupCreationFailedError(
                f"failed to create keycloak group: {e}"
            ) from e

        workspace: Workspace | None = None
        saved = False
        try:
            workspace = Workspace.create(
                name=command.name,
                keycloak_group_id=group_id,
                created_by=command.created_by,
                description=command.description,
            )
            with operation_context("failed to save workspace"):
                await self._workspace_repository.save(workspace)
            saved = True

            with operation_context("failed to add workspace owner"):
                await self._workspace_repository.add_member(
                    Member.create(
                        user_id=command.created_by,
                        workspace_id=workspace.id,
                        role=Role.OWNER,
                    )
                )
        except DomainError as e:
            probe.workspace_creation_failed(name=command.name, error=str(e))
            await self._compensate_creation(
                probe, group_id, workspace.id if saved and workspace else None
            )
            raise

        try:
            await self._identity_client.add_user_to_group(
                command.created_by.value, group_id
            )
        except Exception as e:
            probe.group_membership_sync_failed(
                user_id=command.created_by.value,
                keycloak_group_id=group_id,
                error=str(e),
            )

        await self._dispatcher.dispatch(
            workspace.collect_events(), actor_id=command.created_by.value
        )
        probe.workspace_created(
            workspace_id=workspace.id.value,
            name=workspace.name,
            keycloak_group_id=group_id,
            created_by=command.created_by.value,
        )
        return workspace

    async def _compensate_creation(
        self,
        probe: WorkspaceServiceProbe,
        group_id: str,
        saved_workspace_id: WorkspaceId | None,
    ) -> None:
        """Undo a partially created workspace. Failures are recorded, not raised."""
        if saved_workspace_id is not None:
            try:
                await self._workspace_repository.delete(saved_workspace_id)
            except Exception as e:
                probe.compensation_failed(
                    keycloak_group_id=group_id,
                    workspace_id=saved_workspace_id.value,
                    error=str(e),
                )

        try:
            await self._identity_client.delete_group(group_id)
        except Exception as e:
            probe.compensation_failed(keycloak_group_id=group_id, error=str(e))

    async def update_workspace(self, command: UpdateWorkspaceCommand) -> Workspace:
        """Rename a workspace. Requires an owner or admin.

        Raises:
            InvalidInputError: If the command is invalid
            WorkspaceNotFoundError: If the workspace does not exist
            NotWorkspaceAdminError: If the user is not an owner or admin
        """
        probe = self._observed_probe()
        try:
            try:
                required_id("workspace_id", command.workspace_id)
                _validate_name(command.name)
                required_id("updated_by", command.updated_by)
            except InvalidInputError as e:
                raise e.with_context("validation failed")

            workspace = await self._load(command.workspace_id)
            await require_member(
                self._workspace_repository,
                workspace.id,
                command.updated_by,
                Member.is_admin,
            )

            workspace.update_name(command.name)
            with operation_context("failed to save workspace"):
                await self._workspace_repository.save(workspace)
        except DomainError as e:
            probe.operation_failed(
                operation="update_workspace",
                error=str(e),
                workspace_id=(
                    command.workspace_id.value if command.workspace_id else None
                ),
            )
            raise

        await self._dispatcher.dispatch(
            workspace.collect_events(), actor_id=command.updated_by.value
        )
        probe.workspace_updated(
            workspace_id=workspace.id.value,
            name=workspace.name,
            updated_by=command.updated_by.value,
        )
        return workspace

    async def delete_workspace(self, command: DeleteWorkspaceCommand) -> None:
        """Delete a workspace and release its identity-provider group.

        Only the owner (or the creator) may delete. The group is deleted
        first; if that fails nothing is changed. A group that no longer
        exists counts as already released, so a deletion whose repository
        step failed can simply be retried.

        Raises:
            InvalidInputError: If the command is invalid
            WorkspaceNotFoundError: If the workspace does not exist
            NotWorkspaceAdminError: If the user may not delete the workspace
            KeycloakGroupDeletionFailedError: If the group could not be deleted
            PersistenceError: If the group was released but the workspace
                could not be deleted
        """
        probe = self._observed_probe()
        try:
            try:
                required_id("workspace_id", command.workspace_id)
                required_id("deleted_by", command.deleted_by)
            except InvalidInputError as e:
                raise e.with_context("validation failed")

            workspace = await self._load(command.workspace_id)
            if workspace.created_by != command.deleted_by:
                await require_member(
                    self._workspace_repository,
                    workspace.id,
                    command.deleted_by,
                    Member.is_owner,
                )

            try:
                await self._identity_client.delete_group(workspace.keycloak_group_id)
            except GroupNotFoundError:
                pass
            except Exception as e:
                raise KeycloakGroupDeletionFailedError(
                    f"failed to delete keycloak group: {e}"
                ) from e

            workspace.mark_for_deletion(command.deleted_by)
            try:
                with operation_context("failed to delete workspace"):
                    await self._workspace_repository.delete(workspace.id)
            except PersistenceError as e:
                # Retrying the delete finishes it: a missing group is released
                probe.workspace_deletion_incomplete(
                    workspace_id=workspace.id.value,
                    keycloak_group_id=workspace.keycloak_group_id,
                    error=str(e),
                )
                raise
        except NotWorkspaceAdminError as e:
            probe.operation_failed(
                operation="delete_workspace",
                error=str(e),
                workspace_id=command.workspace_id.value,
            )
            raise
        except DomainError as e:
            probe.workspace_deletion_failed(
                workspace_id=(
                    command.workspace_id.value if command.workspace_id else ""
                ),
                error=str(e),
            )
            raise

        await self._dispatcher.dispatch(
            workspace.collect_events(), actor_id=command.deleted_by.value
        )
        probe.workspace_deleted(
            workspace_id=workspace.id.value, deleted_by=command.deleted_by.value
        )

    async def get_workspace(self, query: GetWorkspaceQuery) -> Workspace:
        """Retrieve a workspace with its invites.

        Raises:
            InvalidInputError: If workspace_id is missing
            WorkspaceNotFoundError: If the workspace does not exist
        """
        probe = self._observed_probe()
        try:
            required_id("workspace_id", query.workspace_id)
        except InvalidInputError as e:
            raise e.with_context("validation failed")

        try:
            workspace = await self._load(query.workspace_id)
        except WorkspaceNotFoundError:
            probe.workspace_not_found(workspace_id=query.workspace_id.value)
            raise

        probe.workspace_retrieved(workspace_id=workspace.id.value, name=workspace.name)
        return workspace

    async def list_user_workspaces(
        self, query: ListUserWorkspacesQuery
    ) -> WorkspaceList:
        """List the workspaces a user is a member of.

        Raises:
            InvalidInputError: If user_id is missing, offset is negative or
                limit is outside 1..MAX_PAGE_SIZE
        """
        probe = self._observed_probe()
        try:
            required_id("user_id", query.user_id)
            non_negative("offset", query.offset)
            value_in_range("limit", query.limit, 1, MAX_PAGE_SIZE)
        except InvalidInputError as e:
            raise e.with_context("validation failed")

        with operation_context("failed to list workspaces"):
            workspaces = await self._workspace_repository.list_workspaces_by_user(
                query.user_id, offset=query.offset, limit=query.limit
            )
            total_count = await self._workspace_repository.count_workspaces_by_user(
                query.user_id
            )

        probe.workspaces_listed(
            user_id=query.user_id.value,
            count=len(workspaces),
            total_count=total_count,
        )
        return WorkspaceList(
            workspaces=workspaces,
            total_count=total_count,
            offset=query.offset,
            limit=query.limit,
        )
