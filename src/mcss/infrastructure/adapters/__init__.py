"""Adapters to third-party chemistry toolkits."""
