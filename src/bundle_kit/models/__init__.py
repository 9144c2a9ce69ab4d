"""Data models for bundle-kit.

Import from submodules:
- bundle: Bundle, CommandArtifact, AgentArtifact, SkillArtifact, PluginManifest
- config: ConfigDocument, parse_config_document
- installation: InstallContext, InstallResult, InstallStage
- permissions: PermissionMode, parse_permission_mode
"""
