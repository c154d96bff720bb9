"""
NexaForm Form Builders
======================

Class-based forms and a registry that creates them by name.

Example:
    registry = FormRegistry()

    @registry.register("newsletter")
    class NewsletterForm(FormBuilder):
        form_id = "newsletter"
        ajax = True

        def create(self):
            self.form.fields.add_input("email", "E-mail").add_submit_button("Join")

        def validation(self):
            return {"email": ["required", "isEmail"]}

        def on_submit(self):
            if self.service("subscribers").exists(self.form.get("email")):
                self.add_error("email", "Already subscribed.")
                return
            self.service("subscribers").add(self.form.get("email"))
            self.form.redirect("/thanks")

    html = registry.generate("newsletter", request, container=container)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Type, Union

from nexaform.core.container import ServiceContainer
from nexaform.exceptions import FormConfigurationError, FormNotFoundError
from nexaform.forms.fields import HTTPMethod
from nexaform.forms.form import Form
from nexaform.utils.logger import LogLevel, get_logger
from nexaform.validation.messages import Locale
from nexaform.validation.validator import RuleSpec

if TYPE_CHECKING:
    from nexaform.core.request import Request


class FormBuilder(ABC):
    """
    Base class for application forms.

    Subclasses declare fields in create(), rules in validation() and
    what happens with an accepted submission in on_submit().
    """

    method: Union[HTTPMethod, str, None] = HTTPMethod.POST
    action: Optional[str] = None
    form_id: Optional[str] = None
    theme: Optional[str] = None
    locale: Union[Locale, str, None] = None
    ajax: bool = False

    def __init__(
        self,
        request: Optional["Request"],
        container: Optional[ServiceContainer] = None,
        data: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.request = request
        self.container = container if container is not None else ServiceContainer()
        self.data: Dict[str, Any] = dict(data or {})
        self.logger = get_logger("nexaform.form")
        self.form = Form(
            request,
            action=self.action,
            method=self.method,
            form_id=self.form_id,
            theme=self.theme,
            locale=self.locale,
            ajax=self.ajax,
            container=self.container,
        )

    def init(self) -> None:
        """Runs before create(); override to load what the form needs."""

    @abstractmethod
    def create(self) -> None:
        """Declare fields on self.form.fields."""

    @abstractmethod
    def validation(self) -> RuleSpec:
        """Rules per field path."""

    @abstractmethod
    def on_submit(self) -> None:
        """Handle an accepted submission."""

    def add_error(self, path: str, message: str) -> None:
        self.form.add_error(path, message)

    def service(self, name: str) -> Any:
        """
        Get a collaborator from the container.

        Raises:
            ServiceNotFoundError: Nothing registered under name
        """
        return self.container.resolve(name)

    def log(self, message: str, level: Union[str, int, LogLevel] = "INFO", **context: Any) -> None:
        self.logger.log(level, message, form=type(self).__name__, **context)

    def generate(self) -> str:
        """
        Build, validate, handle and render the form.

        Raises:
            ShortCircuit: Partial render or redirect
        """
        self.init()
        self.create()
        self.form.validate(self.validation())

        if self.form.is_submitted():
            self.on_submit()

        return self.form.render()


BuilderClass = Type[FormBuilder]


class FormRegistry:
    """
    Explicit name -> builder class mapping.

    Names are registered up front; generate() never looks classes up
    any other way.
    """

    def __init__(self) -> None:
        self._builders: Dict[str, BuilderClass] = {}

    def register(
        self,
        name: str,
        builder: Optional[BuilderClass] = None,
    ) -> Union[BuilderClass, Callable[[BuilderClass], BuilderClass]]:
        """
        Register a builder class, directly or as a decorator.

        Raises:
            FormConfigurationError: Not a FormBuilder subclass, or name taken
        """
        def decorator(cls: BuilderClass) -> BuilderClass:
            if not isinstance(cls, type) or not issubclass(cls, FormBuilder):
                raise FormConfigurationError(f"Form '{name}' must be a FormBuilder subclass")
            if name in self._builders and self._builders[name] is not cls:
                raise FormConfigurationError(f"Form '{name}' is already registered")
            self._builders[name] = cls
            return cls

        if builder is not None:
            return decorator(builder)
        return decorator

    def get(self, name: str) -> Optional[BuilderClass]:
        """Builder class for name, or None."""
        return self._builders.get(name)

    def generate(
        self,
        name: str,
        request: Optional["Request"],
        container: Optional[ServiceContainer] = None,
        data: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """
        Create the named form and return its markup.

        Raises:
            FormNotFoundError: Unknown name
        """
        builder_class = self.get(name)
        if builder_class is None:
            raise FormNotFoundError(name)
        return builder_class(request, container=container, data=data).generate()

    def names(self) -> List[str]:
        return list(self._builders)

    def __contains__(self, name: str) -> bool:
        return name in self._builders

    def __len__(self) -> int:
        return len(self._builders)
