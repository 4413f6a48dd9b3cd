"""
Background services for clipstash.
"""

from .hit_counter import HitCounter, ServiceScope
from .maintenance import Maintenance

__all__ = ["HitCounter", "Maintenance", "ServiceScope"]
