"""Shared helpers: fetching, URL validation, titles and response models."""
