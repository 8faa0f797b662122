"""Core domain: models, collaborator interfaces and services."""
