"""MCP server exposing payroll tools."""
