"""
Core utilities and shared components for QuorumCal.

This package provides the components used across every app: the exception
hierarchy with its DRF exception handler, and cache key generation.
"""

__version__ = "1.0.0"
