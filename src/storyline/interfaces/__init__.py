"""Interfaces (application boundary) for STORYLINE.

Defines framework-free contracts: ABCs for the filesystem, test reader/writer,
execution engine and ID generators. Business rules stay out of this package.

Dependency rule: may import `storyline.domain` types only. It may be imported by
`storyline.service_layer`, `storyline.adapters`, and `storyline.bootstrap`.
"""
