"""
Autowire - ordered auto-configuration resolution

Autowire decides which candidate configurations a component-wiring framework
activates at startup, and in which order, from exclusion rules, admission
filters, priorities and before/after constraints.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
