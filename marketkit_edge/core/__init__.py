"""Core configuration, error types and concurrency helpers."""
