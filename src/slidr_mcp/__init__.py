"""MCP server exposing slidr decks as tools."""
