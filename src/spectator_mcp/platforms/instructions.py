"""Manual setup instructions, one template per platform.

Templates are pure: they describe paths without reading them and never
touch the network. Output is plain text; the CLI decides how to render it.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from spectator_mcp import settings
from spectator_mcp.config.matching import build_server_entry
from spectator_mcp.models import Scope

if TYPE_CHECKING:
    from spectator_mcp.models import PlatformDescriptor


def _entry_snippet(api_key: str) -> str:
    entry = build_server_entry(api_key).to_dict()
    return json.dumps({settings.SERVER_NAME: entry}, indent=2)


def _document_snippet(api_key: str) -> str:
    entry = build_server_entry(api_key).to_dict()
    return json.dumps({"mcpServers": {settings.SERVER_NAME: entry}}, indent=2)


def _path(descriptor: PlatformDescriptor, scope: Scope) -> str:
    path = descriptor.resolve_path(scope)
    return str(path) if path is not None else "(not available on this operating system)"


def _endpoint(api_key: str) -> str:
    return f"{settings.server_url()}/{api_key}"


def claude_desktop(descriptor: PlatformDescriptor, api_key: str) -> str:
    return f"""
Manual Configuration for {descriptor.display_name}:

1. Open your Claude Desktop configuration file:
   {_path(descriptor, Scope.GLOBAL)}

2. Add the following to the "mcpServers" section:

{_entry_snippet(api_key)}

3. If the file doesn't exist, create it with:

{_document_snippet(api_key)}

4. Restart Claude Desktop for changes to take effect.

Alternative: Custom Connector (Pro/Team/Enterprise only):
1. In Claude, go to Settings > Connectors
2. Click "Add custom connector"
3. Enter:
   - Name: {settings.CONNECTOR_DISPLAY_NAME}
   - URL: {_endpoint(api_key)}
"""


def claude_code(descriptor: PlatformDescriptor, api_key: str) -> str:
    return f"""
Manual Configuration for {descriptor.display_name}:

Automatic setup (recommended):
   spectator-mcp {api_key}

Manual setup:
1. Edit the settings file:
   {_path(descriptor, Scope.GLOBAL)}

2. Add the following to your settings:

{_document_snippet(api_key)}

3. Restart Claude Code for changes to take effect.

If Claude Code is not installed yet:
   npm install -g @anthropic-ai/claude-code
"""


def cursor(descriptor: PlatformDescriptor, api_key: str) -> str:
    return f"""
Manual Configuration for {descriptor.display_name}:

Option 1: Global Configuration (all projects):
1. Create/edit the file:
   {_path(descriptor, Scope.GLOBAL)}

2. Add the following to the "mcpServers" section:

{_entry_snippet(api_key)}

Option 2: Project Configuration (current project only):
1. Create/edit the file:
   {_path(descriptor, Scope.PROJECT)}

2. Add the same configuration as above.

3. If the file doesn't exist, create it with:

{_document_snippet(api_key)}

4. Restart Cursor for changes to take effect.
"""


def windsurf(descriptor: PlatformDescriptor, api_key: str) -> str:
    return f"""
Manual Configuration for {descriptor.display_name}:

1. Open the Windsurf MCP configuration file:
   {_path(descriptor, Scope.GLOBAL)}

   (Windsurf Settings > Cascade > MCP Servers > "View raw config" opens it.)

2. Add the following to the "mcpServers" section:

{_entry_snippet(api_key)}

3. If the file doesn't exist, create it with:

{_document_snippet(api_key)}

4. Press "Refresh" in the MCP Servers panel or restart Windsurf.
"""


def vscode(descriptor: PlatformDescriptor, api_key: str) -> str:
    return f"""
Manual Configuration for {descriptor.display_name}:

Option 1: Project Configuration (recommended):
1. Create/edit the file in your project:
   {_path(descriptor, Scope.PROJECT)}

2. Add the following to the "mcpServers" section:

{_entry_snippet(api_key)}

Option 2: Global Configuration (all projects):
1. Create/edit the file:
   {_path(descriptor, Scope.GLOBAL)}

2. Add the same configuration as above.

3. If the file doesn't exist, create it with:

{_document_snippet(api_key)}

Alternative: Using Command Palette:
1. Open Command Palette (Cmd/Ctrl + Shift + P)
2. Run: "MCP: Add Server"
3. Choose workspace or user settings
4. Configure the server with the details above

Note: VS Code MCP support requires GitHub Copilot to be installed and active.
"""


def cline(descriptor: PlatformDescriptor, api_key: str) -> str:
    entry = build_server_entry(api_key)
    return f"""
Manual Configuration for {descriptor.display_name}:

Method 1: Through the Cline UI (recommended):
1. Open VS Code
2. Click the "MCP Servers" icon in the Cline extension panel
3. Add a new server with these details:
   - Name: {settings.SERVER_NAME}
   - Command: {entry.command}
   - Args: {", ".join(entry.args)}

Method 2: Direct File Edit:
1. Open the Cline MCP settings file:
   {_path(descriptor, Scope.GLOBAL)}

2. Add the following to the "mcpServers" section:

{_entry_snippet(api_key)}

3. If the file doesn't exist, create it with:

{_document_snippet(api_key)}

4. Restart VS Code for changes to take effect.

Note: Make sure the Cline extension is installed in VS Code first.
"""
