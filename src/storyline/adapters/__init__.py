"""Adapters (infrastructure) for STORYLINE.

Provide concrete implementations of the interfaces: local and in-memory
filesystems, the XML test format, the project descriptor file, the hierarchy
loader, the grammar execution engine and the result artifact writer.

Dependency rule: may import `storyline.domain`, `storyline.interfaces` and the
`Project` model from `storyline.service_layer.project` (the descriptor file and
hierarchy loader build or read projects). Inner layers must not import this
package.
"""
