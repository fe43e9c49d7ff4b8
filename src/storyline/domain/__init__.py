"""Domain layer for STORYLINE.

Holds the in-memory test hierarchy (hierarchy, suites, tests), the opaque test
parts, result value objects and domain errors. Pure Python: no I/O.

Dependency rule: must not import from `storyline.adapters`,
`storyline.service_layer` or `storyline.entrypoints`.
"""
