# Claude Code skill -> Gemini CLI extension conversion
import logging
from typing import Any

from skillporter.converters.base import (
    GEMINI_FOOTER,
    GEMINI_TITLE_SUFFIX,
    QUICK_START,
    BaseConverter,
    strip_conversion_boilerplate,
    title_line,
)
from skillporter.errors import MalformedDocumentError
from skillporter.models import ConversionResult, MCPServer, Platform, SkillDocument
from skillporter.platforms.base import servers_from_dict, servers_to_dict
from skillporter.platforms.claude import ClaudeLayout
from skillporter.platforms.gemini import DEFAULT_CONTEXT_FILE, MANIFEST_FILE
from skillporter.settings import infer_settings
from skillporter.tools import allowed_to_excluded
from skillporter.utils.env import add_extension_path

logger = logging.getLogger(__name__)

DEFAULT_VERSION = "1.0.0"


def _first_plugin(marketplace: dict[str, Any] | None) -> dict[str, Any]:
    if not marketplace:
        return {}
    plugins = marketplace.get("plugins")
    if isinstance(plugins, list) and plugins and isinstance(plugins[0], dict):
        return plugins[0]
    return {}


def transform_servers_for_gemini(servers: dict[str, MCPServer]) -> dict[str, MCPServer]:
    """Rewrite server configs for an extension manifest.

    ABOUTME: Relative-path args get the ${extensionPath}/ prefix
    ABOUTME: Env values already use the shared ${VAR} syntax and are copied unchanged
    """
    return {
        name: MCPServer(
            name=name,
            command=server.command,
            args=[add_extension_path(arg) for arg in server.args],
            env=dict(server.env),
            extra=dict(server.extra),
        )
        for name, server in servers.items()
    }


class ClaudeToGeminiConverter(BaseConverter):
    """Converts a Claude Code skill into a Gemini CLI extension.

    ABOUTME: Writes gemini-extension.json and GEMINI.md next to (or instead of) the skill
    ABOUTME: allowed-tools becomes excludeTools; env placeholders become settings
    """

    source_platform = Platform.CLAUDE
    target_platform = Platform.GEMINI

    def _convert(self, result: ConversionResult) -> None:
        skill = ClaudeLayout().load(self.source)

        name = skill.frontmatter.get("name")
        if not isinstance(name, str) or not name:
            raise MalformedDocumentError("SKILL.md frontmatter missing required field: name")

        result.metadata["source"] = {"frontmatter": skill.frontmatter}

        manifest = self.build_manifest(skill, result)
        self._write_json(MANIFEST_FILE, manifest, result)
        self._write_text(DEFAULT_CONTEXT_FILE, self.build_context(skill, manifest), result)

    def build_manifest(self, skill: SkillDocument, result: ConversionResult) -> dict[str, Any]:
        """Build the gemini-extension.json object.

        ABOUTME: Version comes from marketplace metadata, else 1.0.0
        ABOUTME: Servers come from the first marketplace plugin entry
        """
        frontmatter = skill.frontmatter
        marketplace = skill.marketplace or {}
        plugin = _first_plugin(skill.marketplace)

        metadata = marketplace.get("metadata")
        version = metadata.get("version") if isinstance(metadata, dict) else None

        description = frontmatter.get("description") or plugin.get("description") or ""
        if isinstance(description, list):
            description = " ".join(description)

        manifest: dict[str, Any] = {
            "name": frontmatter["name"],
            "version": str(version) if version else DEFAULT_VERSION,
            "description": description,
            "contextFileName": DEFAULT_CONTEXT_FILE,
        }

        servers: dict[str, MCPServer] = {}
        if plugin.get("mcpServers"):
            servers = transform_servers_for_gemini(servers_from_dict(plugin["mcpServers"]))
            manifest["mcpServers"] = servers_to_dict(servers)

        allowed = frontmatter.get("allowed-tools")
        if allowed:
            mapping = allowed_to_excluded(allowed)
            manifest["excludeTools"] = mapping.tools
            result.metadata["tool_mapping"] = mapping
            if mapping.warning:
                result.add_warning(mapping.warning)
            if mapping.unknown:
                result.add_warning(
                    f"Unknown tools in allowed-tools were not mapped: {', '.join(mapping.unknown)}"
                )

        settings = infer_settings(servers)
        if settings:
            manifest["settings"] = [setting.to_dict() for setting in settings]
        result.metadata["settings_inferred"] = len(settings)

        logger.debug(
            f"Built manifest for {manifest['name']}: {len(servers)} server(s), "
            f"{len(settings)} setting(s)"
        )
        return manifest

    def build_context(self, skill: SkillDocument, manifest: dict[str, Any]) -> str:
        """Build GEMINI.md: banner, quick start, original body, provenance footer."""
        description = manifest.get("description", "")
        body = strip_conversion_boilerplate(skill.body, description)

        parts = [title_line(manifest["name"], GEMINI_TITLE_SUFFIX)]
        if description:
            parts.append(description)
        parts.append(QUICK_START)
        if body:
            parts.append(body)
        parts.append("---")

        return "\n\n".join(parts) + "\n\n" + GEMINI_FOOTER + "\n"
