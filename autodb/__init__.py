"""AutoDB Architect: turn a domain description into a database design."""

__version__ = "0.1.0"
