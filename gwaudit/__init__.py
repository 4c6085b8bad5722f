"""API Gateway log audit - verify execution and access logging across API Gateway stages."""

__version__ = "0.1.0"
