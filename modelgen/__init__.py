"""modelgen: derive storage, wire and runtime artifacts from a data model."""

__version__ = "0.1.0"
