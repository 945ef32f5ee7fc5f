"""Chronicle error types.

Two families live here:
- ChronicleError and its subclasses: what callers of the public API see.
- FilterError and its subclasses: raised from inside template filters.
  They subclass Jinja2's TemplateRuntimeError so the engine treats them
  like its own evaluation errors; the renderer translates them into
  TemplateRenderError.
"""

from jinja2 import TemplateRuntimeError


class ChronicleError(Exception):
    """Base class for all Chronicle domain errors."""

    pass


class TemplateParseError(ChronicleError):
    """Raised when template text fails to compile.

    Attributes:
        message: Innermost diagnostic reported by the template engine
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Failed to parse template: {message}")


class TemplateRenderError(ChronicleError):
    """Raised when a compiled template fails during evaluation.

    Attributes:
        message: Innermost diagnostic reported by the template engine
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Failed to render template: {message}")


class TemplateError(ChronicleError):
    """Raised for engine failures that carry no deeper diagnostic.

    Attributes:
        error: The engine's original exception
    """

    def __init__(self, error: BaseException) -> None:
        self.error = error
        super().__init__(f"Template engine error: {error}")


class ConfigError(ChronicleError):
    """Raised when a configuration value is invalid."""

    pass


class ReleaseDataError(ChronicleError):
    """Raised when release data cannot be read or has the wrong shape."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(f"Invalid release data in {source}: {message}")


class FilterError(TemplateRuntimeError):
    """Base class for errors raised by template filters."""

    def __init__(self, filter_name: str, message: str) -> None:
        self.filter_name = filter_name
        super().__init__(f"Filter `{filter_name}` {message}")


class FilterValueError(FilterError):
    """Raised when a filter receives a value or argument of the wrong shape."""

    pass


class FilterArgumentError(FilterError):
    """Raised when a required filter argument was not supplied."""

    def __init__(self, filter_name: str, argument: str) -> None:
        self.argument = argument
        super().__init__(filter_name, f"is missing required argument `{argument}`")
