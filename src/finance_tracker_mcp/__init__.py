"""
Finance tracker MCP server: records, categories and income/expense reports.
"""

__version__ = "0.1.0"
