"""opkit - composable plugin-driven scaffolding for Kubernetes operators."""

__version__ = "0.1.0"
