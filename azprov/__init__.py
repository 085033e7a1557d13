"""Azure resource provider for declarative infrastructure configuration."""

__version__ = "0.1.0"
