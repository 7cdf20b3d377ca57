"""Staff housing access control - role templates and per-property permission overrides."""

__version__ = "0.1.0"
