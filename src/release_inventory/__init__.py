"""Release Inventory: list the pods, services and deployments of a release."""

__version__ = "0.1.0"
