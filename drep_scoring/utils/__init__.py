"""Shared helpers: text resolution, URLs, chain conversions, logging, audit and threading."""
