"""Core: config, constants, and lifespan wiring.

Single place for settings and shared constants.
"""
