"""Changelog assembly.

Combines an optional header, one rendered body per release, and an optional
footer into a single document. Releases are rendered in the order given
(newest first by convention), each with the configured commit group order
available to the `commit_groups` filter.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from chronicle.config import ChangelogConfig, TemplateConfig
from chronicle.models.release import Release
from chronicle.templates.renderer import Template

logger = logging.getLogger(__name__)


class Changelog:
    """Renders a list of releases into one changelog document.

    Usage:
        changelog = Changelog(releases, config.changelog, config.template)
        text = changelog.generate()
    """

    def __init__(
        self,
        releases: Sequence[Release],
        config: ChangelogConfig | None = None,
        template_config: TemplateConfig | None = None,
    ) -> None:
        """Compile the header, body and footer templates.

        Args:
            releases: Releases to render, in output order
            config: Changelog layout (uses defaults if None)
            template_config: Template engine options

        Raises:
            TemplateParseError: If a template does not compile
            TemplateError: If the engine fails without a diagnostic
        """
        self.releases = list(releases)
        self.config = config or ChangelogConfig()

        self._body = Template(self.config.body, template_config)
        self._header = Template(self.config.header, template_config) if self.config.header else None
        self._footer = Template(self.config.footer, template_config) if self.config.footer else None

    def generate(self) -> str:
        """Render the whole changelog.

        Returns:
            Changelog text

        Raises:
            TemplateRenderError: If any part fails to render
            TemplateError: If the engine fails without a diagnostic
        """
        parts: list[str] = []
        groups = self.config.groups

        # Header and footer see an empty release
        if self._header is not None:
            parts.append(self._header.render_with_groups(Release(), groups))

        for release in self.releases:
            body = self._body.render_with_groups(release, groups)
            logger.debug(
                "Rendered release %s (%d commits)",
                release.version or "unreleased",
                len(release.commits),
            )
            parts.append(body)

        if self._footer is not None:
            parts.append(self._footer.render_with_groups(Release(), groups))

        if self.config.trim:
            parts = [part.strip() for part in parts]

        content = "\n\n".join(part for part in parts if part)
        logger.info("Generated changelog for %d releases", len(self.releases))
        return content + "\n" if content else ""

    def write(self, output_path: Path) -> Path:
        """Generate the changelog and write it to a file.

        Args:
            output_path: Path to write output file

        Returns:
            Path to written file
        """
        content = self.generate()

        # Ensure output directory exists
        output_path.parent.mkdir(parents=True, exist_ok=True)

        output_path.write_text(content, encoding="utf-8")
        logger.info("Wrote changelog to %s", output_path)

        return output_path
