"""Core configuration, errors, logging and shared models."""
