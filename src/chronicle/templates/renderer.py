"""Template renderer for changelog generation.

Renders releases to text using a single Jinja2 template.
All output is deterministic - same release always produces same output.

Engine failures are translated into Chronicle errors:
- TemplateParseError: the template text does not compile
- TemplateRenderError: the compiled template fails during evaluation
- TemplateError: any engine failure without a usable diagnostic
"""

import logging
from collections.abc import Sequence
from typing import Any

from jinja2 import (
    DictLoader,
    Environment,
    StrictUndefined,
    TemplateRuntimeError,
    TemplateSyntaxError,
    Undefined,
)
from jinja2 import Template as JinjaTemplate

from chronicle.config import TemplateConfig
from chronicle.errors import TemplateError, TemplateParseError, TemplateRenderError
from chronicle.models.release import Release
from chronicle.renderers.filters import COMMIT_GROUPS_CONTEXT_KEY, FILTERS

logger = logging.getLogger(__name__)

# Name of the one template each Template instance holds
TEMPLATE_NAME = "template"


def innermost_cause(error: BaseException) -> BaseException | None:
    """Follow the explicit cause chain of error to its deepest link.

    Args:
        error: Exception to inspect

    Returns:
        The deepest `__cause__`, or None if error was not raised from another
    """
    cause = error.__cause__
    while cause is not None and cause.__cause__ is not None:
        cause = cause.__cause__
    return cause


def diagnostic_message(error: BaseException) -> str | None:
    """Extract the most useful diagnostic text from an engine error.

    Args:
        error: Exception raised by the template engine

    Returns:
        Diagnostic text, or None if the error carries nothing beyond itself
    """
    cause = innermost_cause(error)
    if cause is not None:
        return str(cause)

    if isinstance(error, TemplateSyntaxError):
        return f"line {error.lineno}: {error.message}"

    if isinstance(error, TemplateRuntimeError) and error.message:
        return error.message

    return None


class Template:
    """Compiled changelog template.

    The template is compiled once and can be rendered any number of times,
    from any number of threads, against different releases.

    Usage:
        template = Template("{% for c in commits %}- {{ c.message | upper_first }}\\n{% endfor %}")
        text = template.render(release)
    """

    def __init__(self, text: str, config: TemplateConfig | None = None) -> None:
        """Compile a template.

        Args:
            text: Jinja2 template source
            config: Template engine options

        Raises:
            TemplateParseError: If the template does not compile
            TemplateError: If the engine fails without a diagnostic
        """
        self.config = config or TemplateConfig()

        self._env = Environment(
            loader=DictLoader({TEMPLATE_NAME: text}),
            autoescape=False,
            undefined=StrictUndefined if self.config.strict_undefined else Undefined,
            trim_blocks=self.config.trim_blocks,
            lstrip_blocks=self.config.lstrip_blocks,
            keep_trailing_newline=self.config.keep_trailing_newline,
        )

        # Filters must be registered before compiling; Jinja2 resolves
        # filter names at compile time
        self._env.filters.update(FILTERS)

        self._template = self._compile()

    def _compile(self) -> JinjaTemplate:
        try:
            return self._env.get_template(TEMPLATE_NAME)
        except Exception as e:
            message = diagnostic_message(e)
            if message is None:
                raise TemplateError(e) from e
            logger.debug("Template failed to parse: %s", message)
            raise TemplateParseError(message) from e

    def render(self, release: Release) -> str:
        """Render a release.

        Args:
            release: Release to render

        Returns:
            Rendered text

        Raises:
            TemplateRenderError: If evaluation fails with a diagnostic
            TemplateError: If the engine fails without a diagnostic
        """
        return self._render(release.to_dict())

    def render_with_groups(self, release: Release, groups: Sequence[str]) -> str:
        """Render a release with a group order available to `commit_groups`.

        The groups are placed in the context under `commit_groups_filter`,
        which `commit_groups` falls back to when the template does not pass
        `groups` itself.

        Args:
            release: Release to render
            groups: Group names, in presentation order

        Returns:
            Rendered text

        Raises:
            TemplateRenderError: If evaluation fails with a diagnostic
            TemplateError: If the engine fails without a diagnostic
        """
        context = release.to_dict()
        context[COMMIT_GROUPS_CONTEXT_KEY] = list(groups)
        return self._render(context)

    def _render(self, context: dict[str, Any]) -> str:
        try:
            rendered = self._template.render(context)
        except Exception as e:
            message = diagnostic_message(e)
            if message is None:
                raise TemplateError(e) from e
            logger.debug("Template failed to render: %s", message)
            raise TemplateRenderError(message) from e

        logger.debug("Rendered template (%d characters)", len(rendered))
        return rendered
