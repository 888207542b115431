"""
Connectivity check for pluggable relational database drivers.

The package builds a connection descriptor from environment variables,
opens a connection through a driver registered by name, pings it and,
optionally, runs a fixed query whose rows are printed one per line.
See ``obping.services.harness`` for the run lifecycle.
"""
