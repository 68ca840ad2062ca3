# Bobble Source Package
"""
Bobble - bubble shooter engine with pluggable hosts.

Modules:
- core: Abstract interfaces for games, environments, renderers, and host services
- games: Game implementations (Bubble Shooter)
- utils: Configuration loading
"""
