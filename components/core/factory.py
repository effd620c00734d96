"""Construction of the services endpoints work with."""

from typing import Callable, Dict, Type, TypeVar

from components.core.repository import StrideRepository

T = TypeVar("T")


class ConfigurationError(RuntimeError):
    """Raised when the application is wired up wrong."""


class ServiceFactory:
    """Creates registered services bound to one repository."""

    _registry: Dict[type, Callable[[StrideRepository], object]] = {}

    def __init__(self, repository: StrideRepository):
        self.repository = repository

    @classmethod
    def register(cls, service_cls: Type[T]) -> Type[T]:
        cls._registry[service_cls] = service_cls
        return service_cls

    def create(self, service_cls: Type[T]) -> T:
        try:
            builder = self._registry[service_cls]
        except KeyError:
            raise ConfigurationError(f"Unknown service class {service_cls.__name__}") from None
        return builder(self.repository)


def register_default_services() -> None:
    from components.dashboard.service import DashboardService
    from components.planner.service import PlannerService
    from components.template.service import TemplateService

    for service_cls in (DashboardService, PlannerService, TemplateService):
        ServiceFactory.register(service_cls)
