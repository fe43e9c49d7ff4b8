"""Entrypoints (inbound adapters) for STORYLINE.

Expose the application to the outside world: CLI commands. Parse and validate
inputs, call the bootstrap wiring, and present results.

Dependency rule: may import `storyline.bootstrap` and `storyline.service_layer`;
avoid importing `storyline.adapters` directly.
"""
