"""Shortest-path algorithms: frontier, SPF engine, path reconstruction and
best-destination selection."""
