"""Ambient configuration: CLI settings, logging, and property sources."""
