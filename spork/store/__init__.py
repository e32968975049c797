"""Data access for cookbooks and environment manifests.

These are thin adapters over the chef repository on disk and the
``knife`` command for the server.  The orchestrator depends only on the
small method sets they expose, so tests substitute in-memory fakes.
"""

from spork.store.cookbooks import CookbookSource
from spork.store.environments import LocalEnvironmentStore, environments_dir_for
from spork.store.remote import KnifeRemoteStore

__all__ = [
    "CookbookSource",
    "KnifeRemoteStore",
    "LocalEnvironmentStore",
    "environments_dir_for",
]
