"""
mcpbridge - MCP tool servers for GitHub, browser automation and Figma.
"""
__version__ = "1.0.0"
