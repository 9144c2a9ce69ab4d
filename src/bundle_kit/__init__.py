"""bundle-kit: Install plugin bundles into a host tool's config directory.

Import from submodules:
- version: __version__
- io: Bundle reading and config document I/O
- operations: merge, permission transform and the install orchestrator
"""

from bundle_kit.version import __version__ as __version__
