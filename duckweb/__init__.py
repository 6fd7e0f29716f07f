"""
duckweb - DuckDuckGo search and webpage content tools for LLM agents
"""

__version__ = "0.1.1"
