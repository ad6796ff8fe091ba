"""
Runner module - Drives a collision scan.

Components:
- CollisionDetector: discovery, grouping and result assembly
"""

from .detector import CollisionDetector

__all__ = ["CollisionDetector"]
