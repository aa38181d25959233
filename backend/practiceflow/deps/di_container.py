"""
Dependency injection container using dependency-injector.
Wires the application-scoped services and controllers.
"""

from dependency_injector import containers, providers

from practiceflow.core.config import settings
from practiceflow.services.health_service import HealthService
from practiceflow.controllers.health_controller import HealthController


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Configuration
    config = providers.Configuration()

    # Services
    # Singleton so uptime is measured from process start
    health_service = providers.Singleton(
        HealthService,
    )

    # Controllers
    health_controller = providers.Factory(
        HealthController,
        health_service=health_service,
    )


# Global container instance
_container: Container = None


def get_container() -> Container:
    """Get the global dependency injection container."""
    global _container
    if _container is None:
        _container = Container()
        _container.config.from_dict({
            "database_url": settings.DATABASE_URL,
            "project_name": settings.PROJECT_NAME,
        })
    return _container
