"""Narrow presence and content heuristics: license, CI, containers, governance files."""
