"""Security rules for known AI coding tools.

Each entry describes one tool: the ports it opens, the config checks that apply
to it and where its configuration lives relative to the user's home directory.
The scanner picks up new entries automatically; supporting another tool means
appending one ToolRule to TOOL_RULES.
"""

from aiguard.rules.base import (
    ConfigRule,
    FileContains,
    FileMissing,
    PortRule,
    RiskLevel,
    ToolRule,
)

LOOPBACK = ("127.0.0.1", "localhost", "::1")
LOOPBACK_V4 = ("127.0.0.1",)
LOOPBACK_NAMED = ("127.0.0.1", "localhost")


TOOL_RULES: tuple[ToolRule, ...] = (
    # Agent gateway with MCP support
    ToolRule(
        id="clawdbot",
        name="Clawdbot",
        description="Open-source AI agent gateway with MCP support",
        docs_url="https://github.com/clawdbot/clawdbot",
        process_names=("clawdbot", "clawdbot-server", "clawdbot-gateway"),
        ports=(
            PortRule(
                port=18789,
                name="Clawdbot Gateway",
                description="Primary gateway port - should NOT be exposed to internet",
                risk_if_exposed=RiskLevel.CRITICAL,
                safe_bindings=LOOPBACK,
            ),
            PortRule(
                port=18790,
                name="Clawdbot Control UI",
                description="Admin web interface - exposes API keys and chat history",
                risk_if_exposed=RiskLevel.CRITICAL,
                safe_bindings=LOOPBACK,
            ),
        ),
        configs=(
            ConfigRule(
                name="Exposed trustedProxies",
                description="trustedProxies may allow localhost auth bypass via reverse proxy",
                check=FileMissing(
                    pattern="trustedProxies", path_pattern="**/clawdbot.config.*"
                ),
                risk_level=RiskLevel.HIGH,
                remediation="Set gateway.trustedProxies to only trusted reverse proxy IPs",
            ),
            ConfigRule(
                name="API Keys in Config",
                description="Anthropic/OpenAI API keys stored in plaintext config",
                check=FileContains(pattern="sk-ant-|sk-", path_pattern="**/clawdbot.config.*"),
                risk_level=RiskLevel.HIGH,
                remediation="Use environment variables for API keys instead of config files",
            ),
        ),
        config_paths=(".clawdbot/", ".config/clawdbot/"),
    ),
    # CVE-2026-22812: unauthenticated HTTP server with wildcard CORS
    ToolRule(
        id="opencode",
        name="OpenCode",
        description="Terminal-based AI coding assistant (CVE-2026-22812)",
        docs_url="https://github.com/opencode-ai/opencode",
        process_names=("opencode",),
        ports=(
            PortRule(
                port=4096,
                name="OpenCode HTTP Server",
                description=(
                    "CVE-2026-22812: Unauthenticated HTTP server with CORS * - "
                    "allows RCE from any website"
                ),
                risk_if_exposed=RiskLevel.CRITICAL,
                safe_bindings=LOOPBACK_V4,
            ),
            PortRule(
                port=4097,
                name="OpenCode HTTP Server (alt)",
                description="CVE-2026-22812: Alternative port when 4096 is in use",
                risk_if_exposed=RiskLevel.CRITICAL,
                safe_bindings=LOOPBACK_V4,
            ),
            PortRule(
                port=8765,
                name="OpenCode Debug Server",
                description="Debug/MCP server - should be localhost only",
                risk_if_exposed=RiskLevel.HIGH,
                safe_bindings=LOOPBACK_NAMED,
            ),
        ),
        configs=(
            ConfigRule(
                name="API Keys in Config",
                description="API keys stored in opencode config",
                check=FileContains(pattern="sk-", path_pattern="**/opencode.json"),
                risk_level=RiskLevel.HIGH,
                remediation=(
                    "Use environment variables for API keys. "
                    "Update to OpenCode >= 1.0.216 to fix CVE-2026-22812"
                ),
            ),
        ),
        config_paths=(".opencode/", ".config/opencode/"),
    ),
    ToolRule(
        id="aider",
        name="Aider",
        description="AI pair programming in your terminal",
        docs_url="https://aider.chat",
        process_names=("aider",),
        ports=(
            PortRule(
                port=8501,
                name="Aider Web UI",
                description="Aider browser interface",
                risk_if_exposed=RiskLevel.MEDIUM,
                safe_bindings=LOOPBACK_NAMED,
            ),
        ),
        configs=(
            ConfigRule(
                name="API Keys in .aider.conf",
                description="API keys in aider config file",
                check=FileContains(pattern="api_key", path_pattern="**/.aider.conf*"),
                risk_level=RiskLevel.MEDIUM,
                remediation="Use OPENAI_API_KEY or ANTHROPIC_API_KEY environment variables",
            ),
        ),
        config_paths=(".aider.conf.yml", ".aider/"),
    ),
    ToolRule(
        id="claude-code",
        name="Claude Code",
        description="Anthropic's official AI coding CLI",
        docs_url="https://docs.anthropic.com/claude-code",
        process_names=("claude", "claude-code"),
        ports=(
            PortRule(
                port=9222,
                name="Claude Code Debug Port",
                description="Chrome DevTools debug protocol port",
                risk_if_exposed=RiskLevel.CRITICAL,
                safe_bindings=LOOPBACK_V4,
            ),
        ),
        config_paths=(".claude/",),
    ),
    ToolRule(
        id="codex-cli",
        name="Codex CLI",
        description="OpenAI's Codex command-line tool",
        docs_url="https://github.com/openai/codex-cli",
        process_names=("codex",),
        configs=(
            ConfigRule(
                name="OpenAI API Key in config",
                description="API key stored in codex config",
                check=FileContains(pattern="sk-", path_pattern="**/codex/config.*"),
                risk_level=RiskLevel.MEDIUM,
                remediation="Use OPENAI_API_KEY environment variable",
            ),
        ),
        config_paths=(".codex/", ".config/codex/"),
    ),
    ToolRule(
        id="continue",
        name="Continue",
        description="Open-source AI code assistant (VS Code extension)",
        docs_url="https://continue.dev",
        process_names=("continue",),
        ports=(
            PortRule(
                port=65432,
                name="Continue Local Server",
                description="Continue's local model server",
                risk_if_exposed=RiskLevel.MEDIUM,
                safe_bindings=LOOPBACK_NAMED,
            ),
        ),
        config_paths=(".continue/",),
    ),
    # Supply chain attack via .vscode/tasks.json
    ToolRule(
        id="cursor",
        name="Cursor",
        description="AI-first code editor based on VS Code",
        docs_url="https://cursor.sh",
        process_names=("cursor", "cursor-helper"),
        ports=(
            PortRule(
                port=9229,
                name="Cursor Debug Port",
                description="Node.js inspector port - allows remote code execution if exposed",
                risk_if_exposed=RiskLevel.CRITICAL,
                safe_bindings=LOOPBACK_V4,
            ),
        ),
        configs=(
            ConfigRule(
                name="Workspace Trust Disabled",
                description=(
                    "Malicious .vscode/tasks.json can execute arbitrary code on project open"
                ),
                check=FileMissing(
                    pattern="security.workspace.trust", path_pattern="**/settings.json"
                ),
                risk_level=RiskLevel.MEDIUM,
                remediation=(
                    "Enable Workspace Trust feature in Cursor settings. "
                    "Audit .vscode/tasks.json in untrusted repos"
                ),
            ),
        ),
        config_paths=(".cursor/", ".vscode/"),
    ),
    ToolRule(
        id="windsurf",
        name="Windsurf",
        description="Codeium's AI-powered IDE",
        docs_url="https://codeium.com/windsurf",
        process_names=("windsurf",),
        ports=(
            PortRule(
                port=42424,
                name="Windsurf Language Server",
                description="AI language server port",
                risk_if_exposed=RiskLevel.MEDIUM,
                safe_bindings=LOOPBACK_NAMED,
            ),
        ),
        config_paths=(".windsurf/",),
    ),
    # Model Context Protocol servers: credential leakage and SSRF are common
    ToolRule(
        id="mcp-servers",
        name="MCP Servers",
        description="Model Context Protocol servers - 36.7% vulnerable to SSRF (2026)",
        docs_url="https://modelcontextprotocol.io",
        process_names=("mcp-server", "mcp"),
        ports=(
            PortRule(
                port=3000,
                name="MCP Server Default",
                description="Common MCP server port - check for auth and CORS settings",
                risk_if_exposed=RiskLevel.HIGH,
                safe_bindings=LOOPBACK_V4,
            ),
            PortRule(
                port=8080,
                name="MCP Server HTTP",
                description="MCP HTTP server - verify authentication is enabled",
                risk_if_exposed=RiskLevel.HIGH,
                safe_bindings=LOOPBACK_V4,
            ),
        ),
        configs=(
            ConfigRule(
                name="API Keys in MCP Config",
                description="Credentials exposed via environment variables or config",
                check=FileContains(
                    pattern="sk-|api_key|apiKey|API_KEY", path_pattern="**/mcp.json"
                ),
                risk_level=RiskLevel.CRITICAL,
                remediation="Use secret management. Never store API keys in MCP config files",
            ),
        ),
        config_paths=(".mcp/", ".config/mcp/"),
    ),
    ToolRule(
        id="gemini-cli",
        name="Gemini CLI",
        description="Google's Gemini AI coding assistant",
        docs_url="https://cloud.google.com/vertex-ai/docs/generative-ai/gemini",
        process_names=("gemini",),
        configs=(
            ConfigRule(
                name="API Keys in Config",
                description="Google API keys stored in config",
                check=FileContains(pattern="AIza", path_pattern="**/settings.json"),
                risk_level=RiskLevel.MEDIUM,
                remediation="Use GOOGLE_API_KEY environment variable or gcloud auth",
            ),
        ),
        config_paths=(".gemini/", ".config/gemini-cli/"),
    ),
)
