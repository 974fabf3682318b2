# Invaders Source Package
"""
Invaders - Single-screen arcade shooter simulation.

Modules:
- core: Abstract interfaces for games, renderers and external collaborators
- games: Game implementations (Space Invaders)
- utils: Configuration, logging and high score persistence
"""
