"""
MCP server for the finance tracker.

Exposes records, categories and reports through the Model Context Protocol.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from finance_tracker_mcp.core.database import FinanceDatabase
from finance_tracker_mcp.core.exceptions import FinanceTrackerError
from finance_tracker_mcp.tools.tools import FinanceTools, create_tool_schemas

logger = logging.getLogger(__name__)


def error_content(status: int, message: str) -> list[TextContent]:
    """Wrap an error as a JSON text result."""
    payload = {"error": {"status": status, "message": message}}
    return [TextContent(type="text", text=json.dumps(payload))]


class FinanceTrackerServer:
    """MCP server for finance tracker data."""

    def __init__(self, db_path: Optional[Path] = None, seed: bool = True):
        """
        Initialize the MCP server.

        Args:
            db_path: Optional path to the SQLite database.
                    If None, uses ~/.finance-tracker/finance.db.
            seed: Create the default categories on first use
        """
        self.db = FinanceDatabase(db_path)
        self.tools = FinanceTools(self.db)
        self.server = Server("finance-tracker-mcp")
        self.seed = seed
        self._prepared = False

        # Register handlers
        self._register_handlers()

    def prepare(self) -> None:
        """Create the schema and seed default categories, once per process."""
        if self._prepared:
            return
        self.db.initialize()
        if self.seed:
            self.db.seed_default_categories()
        self._prepared = True

    def handle_call(self, name: str, arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        """Run a tool and format its result or error."""
        if not self.db.is_available():
            return error_content(
                500,
                f"Database not available at {self.db.db_path}. "
                "Please create the directory or provide a different --db-path.",
            )

        try:
            self.prepare()
            result = self.tools.call(name, arguments or {})
        except FinanceTrackerError as e:
            if e.status >= 500:
                logger.exception(f"Store error executing tool {name}")
            else:
                logger.warning(f"Tool {name} rejected: {e}")
            return error_content(e.status, str(e))
        except Exception as e:
            logger.exception(f"Error executing tool {name}")
            return error_content(500, f"Error executing tool: {str(e)}")

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    def _register_handlers(self) -> None:
        """Register MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            """List available tools."""
            return [
                Tool(
                    name=schema["name"],
                    description=schema["description"],
                    inputSchema=schema["inputSchema"],
                )
                for schema in create_tool_schemas()
            ]

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
            """Handle tool calls."""
            return self.handle_call(name, arguments)

    async def run(self) -> None:  # pragma: no cover
        """Run the MCP server using stdio transport."""
        self.prepare()
        try:
            async with stdio_server() as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                )
        finally:
            self.db.close()


async def run_server(db_path: Optional[Path] = None, seed: bool = True) -> None:  # pragma: no cover
    """
    Run the finance tracker MCP server.

    Args:
        db_path: Optional path to the SQLite database.
        seed: Create the default categories on startup
    """
    server = FinanceTrackerServer(db_path, seed=seed)
    await server.run()
