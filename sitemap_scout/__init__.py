# sitemap_scout/__init__.py
"""
sitemap_scout package initializer.
Defines package version and exposes the console entry point.
"""
__version__ = "0.1.0"

# Only ``main`` is re-exported: binding ``cli`` here would shadow the
# ``sitemap_scout.cli`` submodule attribute.
from .cli import main  # noqa: E402
