"""Install operations.

Import from submodules:
- config_merge: merge, merge_report
- permissions: build_permission_fragment
- artifacts: write_artifacts
- install: install_bundle
"""
