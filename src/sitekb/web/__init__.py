"""sitekb web module

Exposes the knowledge base over a REST API.

Usage:
    python -m sitekb.web
"""
