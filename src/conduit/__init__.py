"""Conduit client: route-driven page models over a REST backend."""

__version__ = "0.1.0"
