"""Service layer for STORYLINE.

Implements application use-cases: project path resolution and test
persistence, configuration file discovery, and multi-project run orchestration.

Dependency rule: may import `storyline.domain` and `storyline.interfaces`, but
not `storyline.adapters` or `storyline.entrypoints`.
"""
