"""Derive TypeScript declarations from described structs and enums, and write them to files."""

__version__ = "0.1.0"