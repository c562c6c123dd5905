"""Monobank personal API exposed as Model Context Protocol tools."""
