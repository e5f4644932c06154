"""Domain layer — clock state machine, phases, commands, and progress math.

This layer depends only on stdlib.
It must never import from services, output, plugins, commands, or config.
"""
