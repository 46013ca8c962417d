"""
trustlinker - Propagate cross-chain trusted remotes after a release
"""

__version__ = "0.1.0"

from .core import TrustPropagator
from .errors import TrustLinkerError

__all__ = ["TrustPropagator", "TrustLinkerError"]
