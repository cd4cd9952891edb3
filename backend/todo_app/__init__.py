"""Application package for the Todo backend.

This package exposes the model, repository and service modules that
make up the three layers of the application (HTTP entry point, service,
data access). Individual modules contain the concrete implementations
and documentation.
"""
