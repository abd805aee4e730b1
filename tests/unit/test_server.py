"""
Unit tests for the MCP server implementation.
"""

import json
from pathlib import Path

import pytest

from finance_tracker_mcp.server import FinanceTrackerServer, error_content


@pytest.fixture
def server(db_path):
    """Create server with a fresh database."""
    return FinanceTrackerServer(db_path)


@pytest.fixture
def server_without_db():
    """Create server whose database directory does not exist."""
    return FinanceTrackerServer(Path("/nonexistent/path/finance.db"))


def parse(content):
    assert len(content) == 1
    assert content[0].type == "text"
    return json.loads(content[0].text)


@pytest.mark.unit
def test_server_initialization(server):
    """Test server initialization with valid database path."""
    assert server.db is not None
    assert server.tools is not None
    assert server.server is not None
    assert server.seed is True


@pytest.mark.unit
def test_server_initialization_without_db(server_without_db):
    """Test server initialization does not touch the database."""
    assert server_without_db.db is not None
    assert server_without_db.tools is not None


@pytest.mark.unit
def test_server_with_default_db_path():
    """Test server initialization with default database path."""
    server = FinanceTrackerServer()
    assert server.db.db_path.name == "finance.db"
    assert server.db.db_path.parent.name == ".finance-tracker"


@pytest.mark.unit
def test_server_db_available_check(server):
    assert server.db.is_available() is True


@pytest.mark.unit
def test_server_db_unavailable_check(server_without_db):
    assert server_without_db.db.is_available() is False


@pytest.mark.unit
def test_call_with_unavailable_database_reports_error(server_without_db):
    result = parse(server_without_db.handle_call("get_income", {}))
    assert result["error"]["status"] == 500
    assert "Database not available" in result["error"]["message"]


@pytest.mark.unit
def test_unknown_tool(server):
    result = parse(server.handle_call("drop_everything", {}))
    assert result["error"]["status"] == 400
    assert "Unknown tool" in result["error"]["message"]


@pytest.mark.unit
def test_prepare_seeds_once(server):
    server.prepare()
    server.prepare()
    names = [category.name for category in server.db.get_categories()]
    assert len(names) == len(set(names))
    assert "ostatni" in names


@pytest.mark.unit
def test_prepare_without_seed(db_path):
    server = FinanceTrackerServer(db_path, seed=False)
    server.prepare()
    assert server.db.get_categories() == []


@pytest.mark.unit
def test_error_content_shape():
    assert parse(error_content(404, "Record not found: x")) == {
        "error": {"status": 404, "message": "Record not found: x"}
    }


@pytest.mark.unit
def test_unexpected_exception_is_reported_as_500(server, monkeypatch):
    def explode(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(server.tools, "call", explode)
    result = parse(server.handle_call("get_income", {}))

    assert result["error"]["status"] == 500
    assert "boom" in result["error"]["message"]
