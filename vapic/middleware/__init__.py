"""HTTP middleware: versioned cache negotiation.

Applied in the main app. Import and use from vapic.main.
"""

from vapic.middleware.version_negotiation import VersionNegotiationMiddleware

__all__ = ["VersionNegotiationMiddleware"]
