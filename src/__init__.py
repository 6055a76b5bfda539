"""
Bitcoin Education Agents
========================

Tool-serving educational agents for teaching Bitcoin, built around live
market data (price, mempool fees, news) and MCP-style tool schemas.

This package provides:
- Agents for Socratic questioning, assessments, custody security, Lightning,
  history, accessibility, peer learning, platform strategy and development
  tracking
- MCP tools for price, fees, news, Canva and GitHub
- A daily Canva design refresh scheduler
"""

__version__ = "1.0.0"
