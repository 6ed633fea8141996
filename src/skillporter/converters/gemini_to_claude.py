# Gemini CLI extension -> Claude Code skill conversion
import logging
import re
from typing import Any

from skillporter.converters.base import (
    CLAUDE_FOOTER,
    CLAUDE_TITLE_SUFFIX,
    CONFIGURATION_HEADING,
    CONFIGURATION_INTRO,
    CONFIGURATION_OUTRO,
    BaseConverter,
    strip_conversion_boilerplate,
    title_line,
)
from skillporter.errors import MalformedDocumentError
from skillporter.frontmatter import FrontmatterValue, render_frontmatter
from skillporter.models import ConversionResult, ExtensionDocument, MCPServer, Platform, SettingDescriptor
from skillporter.platforms.base import servers_from_dict, servers_to_dict
from skillporter.platforms.claude import MARKETPLACE_FILE, SKILL_FILE
from skillporter.platforms.gemini import GeminiLayout
from skillporter.tools import excluded_to_allowed
from skillporter.utils.env import strip_extension_path

logger = logging.getLogger(__name__)

# ABOUTME: Words too common to be useful marketplace keywords
STOP_WORDS = frozenset(
    ["the", "a", "an", "and", "or", "but", "for", "with", "to", "from", "in", "on"]
)
MAX_KEYWORDS = 5


def extract_keywords(description: str) -> list[str]:
    """Pick up to five keywords from a description.

    Examples:
        >>> extract_keywords("Query and manage PostgreSQL databases with ease")
        ['query', 'manage', 'postgresql', 'databases', 'ease']
    """
    words = [
        word for word in re.split(r"\s+", description.lower())
        if len(word) > 3 and word not in STOP_WORDS
    ]
    return words[:MAX_KEYWORDS]


def transform_servers_for_claude(servers: dict[str, MCPServer]) -> dict[str, MCPServer]:
    """Rewrite server configs for a marketplace plugin entry.

    ABOUTME: Strips the ${extensionPath}/ prefix from args
    ABOUTME: Env values are left as-is
    """
    return {
        name: MCPServer(
            name=name,
            command=server.command,
            args=[strip_extension_path(arg) for arg in server.args],
            env=dict(server.env),
            extra=dict(server.extra),
        )
        for name, server in servers.items()
    }


def render_configuration(settings: list[SettingDescriptor]) -> str:
    """Render settings as the generated Configuration section."""
    lines = [CONFIGURATION_HEADING, "", CONFIGURATION_INTRO, ""]
    for setting in settings:
        line = f"- `{setting.name}`: {setting.description}"
        if setting.default:
            line += f" (default: {setting.default})"
        if setting.required:
            line += " **(required)**"
        lines.append(line)
    lines.extend(["", CONFIGURATION_OUTRO])
    return "\n".join(lines)


class GeminiToClaudeConverter(BaseConverter):
    """Converts a Gemini CLI extension into a Claude Code skill.

    ABOUTME: Writes SKILL.md and .claude-plugin/marketplace.json
    ABOUTME: excludeTools becomes allowed-tools; settings become a Configuration section
    """

    source_platform = Platform.GEMINI
    target_platform = Platform.CLAUDE

    def _convert(self, result: ConversionResult) -> None:
        extension = GeminiLayout().load(self.source)
        manifest = extension.manifest

        name = manifest.get("name")
        if not isinstance(name, str) or not name:
            raise MalformedDocumentError("gemini-extension.json missing required field: name")

        result.metadata["source"] = {"manifest": manifest}

        self._write_text(SKILL_FILE, self.build_skill(extension, result), result)
        self._write_json(MARKETPLACE_FILE, self.build_marketplace(extension), result)

    def build_frontmatter(
        self, manifest: dict[str, Any], result: ConversionResult
    ) -> dict[str, FrontmatterValue]:
        frontmatter: dict[str, FrontmatterValue] = {"name": manifest["name"]}
        # Empty description is omitted, never written as ''
        description = str(manifest.get("description") or "")
        if description:
            frontmatter["description"] = description

        excluded = manifest.get("excludeTools")
        if excluded:
            mapping = excluded_to_allowed(excluded)
            frontmatter["allowed-tools"] = mapping.tools
            result.metadata["tool_mapping"] = mapping
            if mapping.unknown:
                result.add_warning(
                    f"Unknown tools in excludeTools have no allowed-tools equivalent: "
                    f"{', '.join(mapping.unknown)}"
                )

        return frontmatter

    def _settings(self, manifest: dict[str, Any], result: ConversionResult) -> list[SettingDescriptor]:
        raw = manifest.get("settings")
        if not raw:
            return []
        if not isinstance(raw, list):
            raise MalformedDocumentError("settings must be an array")

        settings: list[SettingDescriptor] = []
        for index, entry in enumerate(raw):
            if not isinstance(entry, dict) or not entry.get("name"):
                result.add_warning(f"Skipping setting at index {index}: missing name")
                continue
            settings.append(SettingDescriptor.from_dict(entry))
        return settings

    def build_skill(self, extension: ExtensionDocument, result: ConversionResult) -> str:
        """Build SKILL.md: frontmatter, banner, configuration, original context, footer.

        ABOUTME: Boilerplate from an earlier conversion is stripped before reuse
        ABOUTME: An empty context gets a generated Usage paragraph
        """
        manifest = extension.manifest
        frontmatter = self.build_frontmatter(manifest, result)
        description = str(frontmatter.get("description", ""))

        parts = [title_line(manifest["name"], CLAUDE_TITLE_SUFFIX)]
        if description:
            parts.append(description)

        settings = self._settings(manifest, result)
        if settings:
            parts.append(render_configuration(settings))

        body = strip_conversion_boilerplate(extension.context, description)
        if body:
            parts.append(body)
        else:
            need = description.rstrip(".").lower() if description else "it"
            parts.append(f"## Usage\n\nUse this skill when you need {need}.")
        parts.append("---")

        return (
            render_frontmatter(frontmatter)
            + "\n"
            + "\n\n".join(parts)
            + "\n\n"
            + CLAUDE_FOOTER
            + "\n"
        )

    def build_marketplace(self, extension: ExtensionDocument) -> dict[str, Any]:
        """Build the marketplace.json wrapper around a single plugin entry.

        ABOUTME: Owner, author, license and repository come from user config
        """
        manifest = extension.manifest
        defaults = self.config.marketplace
        name = manifest["name"]
        description = str(manifest.get("description") or "")

        plugin: dict[str, Any] = {
            "name": name,
            "description": description,
            "source": ".",
            "strict": False,
            "author": defaults.author,
            "repository": {
                "type": "git",
                "url": f"{defaults.repository_base}/{name}",
            },
            "license": defaults.license,
            "keywords": extract_keywords(description),
            "category": defaults.category,
            "tags": [],
            "skills": ["."],
        }

        if manifest.get("mcpServers"):
            servers = transform_servers_for_claude(servers_from_dict(manifest["mcpServers"]))
            plugin["mcpServers"] = servers_to_dict(servers)

        return {
            "name": f"{name}-marketplace",
            "owner": {
                "name": defaults.owner_name,
                "email": defaults.owner_email,
            },
            "metadata": {
                "description": description,
                "version": str(manifest.get("version") or "1.0.0"),
            },
            "plugins": [plugin],
        }
