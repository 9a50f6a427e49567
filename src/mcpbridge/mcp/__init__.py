"""
MCP protocol layer: envelopes, dispatcher, FastAPI route.
"""
