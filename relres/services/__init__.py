"""Application services.

Services coordinate the pure release engine (releases/) with the feed
collaborators (feed/) and report through the console abstraction.
"""

from relres.services.resolve import BatchReport, Resolution, ResolveError, ResolveService

__all__ = [
    "BatchReport",
    "Resolution",
    "ResolveError",
    "ResolveService",
]
