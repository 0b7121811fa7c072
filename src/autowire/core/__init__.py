"""Autowire core library: candidate resolution, filtering and ordering."""

from . import exceptions  # noqa: F401

__all__ = ["exceptions"]
