"""Application Layer - use cases of the STP pipeline.

Commands and queries are plain frozen dataclasses; handlers orchestrate the
domain through the Unit of Work.
"""
