"""
mcpbridge tool catalogs.

Each subpackage exposes SERVER_INFO and a register(registry) function that
fills a ToolRegistry with that service's tools.
"""
