"""Core enumerations, errors, configuration and signature helpers."""
