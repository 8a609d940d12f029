"""
Unit tests laid out like the logkit package.

Each module exercises one logkit module in isolation; collaborators
are real sinks on in-memory streams or mocks.
"""
