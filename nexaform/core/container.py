"""
NexaForm Service Container
==========================

Explicit collaborator lookup for form builders.

Builders that need a repository or mailer get it from the container
they were constructed with:

    container = ServiceContainer()
    container.singleton("users", lambda: UserRepository(db))

    builder = RegisterForm(request, container=container)
    builder.service("users").exists(email)
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Set, TypeVar

T = TypeVar("T")


class ServiceNotFoundError(KeyError):
    """No service registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Service '{self.name}' not registered"


class ServiceContainer:
    """
    Lightweight dependency container.

    Supports singleton and transient factories, plain instances and
    aliases.
    """

    def __init__(self) -> None:
        self._instances: Dict[str, Any] = {}
        self._factories: Dict[str, Callable[[], Any]] = {}
        self._shared: Set[str] = set()
        self._aliases: Dict[str, str] = {}

    def singleton(self, name: str, factory: Callable[[], T]) -> "ServiceContainer":
        """Register a service built once, on first resolution."""
        self._factories[name] = factory
        self._shared.add(name)
        self._instances.pop(name, None)
        return self

    def register(self, name: str, factory: Callable[[], T]) -> "ServiceContainer":
        """Register a transient service (new instance each resolution)."""
        self._factories[name] = factory
        self._shared.discard(name)
        self._instances.pop(name, None)
        return self

    def instance(self, name: str, value: Any) -> "ServiceContainer":
        """Register an existing object."""
        self._instances[name] = value
        self._factories.pop(name, None)
        return self

    def alias(self, alias: str, target: str) -> "ServiceContainer":
        """Create an alias for a service."""
        self._aliases[alias] = target
        return self

    def resolve(self, name: str) -> Any:
        """
        Resolve a service by name.

        Raises:
            ServiceNotFoundError: Nothing registered under name
        """
        resolved_name = self._aliases.get(name, name)

        if resolved_name in self._instances:
            return self._instances[resolved_name]

        if resolved_name not in self._factories:
            raise ServiceNotFoundError(name)

        instance = self._factories[resolved_name]()

        if resolved_name in self._shared:
            self._instances[resolved_name] = instance

        return instance

    def has(self, name: str) -> bool:
        """Check if a service is registered."""
        resolved_name = self._aliases.get(name, name)
        return resolved_name in self._factories or resolved_name in self._instances
