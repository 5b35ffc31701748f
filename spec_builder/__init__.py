# Path: spec_builder/__init__.py
"""
spec_builder - Product Specification Builder

Builds product specifications from extracted test names by resolving
each name against a controlled catalogue of test definitions.

Subpackages:
    - process.matcher: Normalizer, similarity scorer and match ranker
    - process.resolution: Resolution workflow and row assembly
    - storage: Key-value storage port and record stores
    - database: SQLAlchemy persistence for the storage port
    - core: Logging and operator console
"""

__version__ = '1.0.0'
