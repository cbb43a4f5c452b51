"""Architecture tests using pytest-archon.

These tests enforce DDD architectural boundaries between layers within
the Messaging and Workspaces bounded contexts, and between the contexts
themselves.
"""

from pytest_archon import archrule


class TestBoundedContextIsolation:
    """Bounded contexts only meet through the shared kernel."""

    def test_messaging_does_not_import_workspaces(self):
        (
            archrule("messaging_isolated")
            .match("messaging*")
            .should_not_import("workspaces*")
            .check("messaging")
        )

    def test_workspaces_does_not_import_messaging(self):
        (
            archrule("workspaces_isolated")
            .match("workspaces*")
            .should_not_import("messaging*")
            .check("workspaces")
        )

    def test_shared_kernel_does_not_import_contexts(self):
        """The shared kernel is imported by contexts, never the reverse."""
        (
            archrule("shared_kernel_independent")
            .match("shared_kernel*")
            .should_not_import("messaging*", "workspaces*", "infrastructure*")
            .check("shared_kernel")
        )


class TestMessagingLayerBoundaries:
    def test_domain_does_not_import_application(self):
        """Domain objects should be usable without application services."""
        (
            archrule("messaging_domain_no_application")
            .match("messaging.domain*")
            .should_not_import("messaging.application*")
            .check("messaging")
        )

    def test_domain_does_not_import_infrastructure(self):
        (
            archrule("messaging_domain_no_infrastructure")
            .match("messaging.domain*")
            .should_not_import("infrastructure*", "httpx*")
            .check("messaging")
        )

    def test_ports_does_not_import_application(self):
        """Ports are interfaces for the application layer to use,
        not the other way around.
        """
        (
            archrule("messaging_ports_no_application")
            .match("messaging.ports*")
            .should_not_import("messaging.application*")
            .check("messaging")
        )

    def test_application_does_not_import_infrastructure(self):
        """Application services depend on ports, not implementations."""
        (
            archrule("messaging_application_no_infrastructure")
            .match("messaging.application*")
            .should_not_import("infrastructure*")
            .check("messaging")
        )


class TestWorkspacesLayerBoundaries:
    def test_domain_does_not_import_application(self):
        (
            archrule("workspaces_domain_no_application")
            .match("workspaces.domain*")
            .should_not_import("workspaces.application*")
            .check("workspaces")
        )

    def test_domain_does_not_import_infrastructure(self):
        """The domain knows nothing about Keycloak or HTTP."""
        (
            archrule("workspaces_domain_no_infrastructure")
            .match("workspaces.domain*")
            .should_not_import("workspaces.infrastructure*", "httpx*")
            .check("workspaces")
        )

    def test_ports_does_not_import_application(self):
        (
            archrule("workspaces_ports_no_application")
            .match("workspaces.ports*")
            .should_not_import("workspaces.application*")
            .check("workspaces")
        )

    def test_application_does_not_import_infrastructure(self):
        """Application services reach Keycloak only through the port."""
        (
            archrule("workspaces_application_no_infrastructure")
            .match("workspaces.application*")
            .should_not_import("workspaces.infrastructure*", "httpx*")
            .check("workspaces")
        )

    def test_infrastructure_does_not_import_application(self):
        (
            archrule("workspaces_infrastructure_no_application")
            .match("workspaces.infrastructure*")
            .should_not_import("workspaces.application*")
            .check("workspaces")
        )
