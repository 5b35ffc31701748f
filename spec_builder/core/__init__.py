# Path: spec_builder/core/__init__.py
"""
spec_builder Core Package

Core utilities for the specification builder.

Submodules:
    - logger: IPO-aware logging system
    - ui: Operator console interaction
"""
