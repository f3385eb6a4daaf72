"""
Admin console layer.
This package turns the integration clients into views:
- controllers/: list, detail and form state machines
- schemas.py: one descriptor per entity type (columns, defaults, validator)
- validation.py: client-side form checks (never sent to the backend)
- presentation.py: stateless text rendering of controller state

Key rule:
- Controllers MUST NOT call HTTP directly; they go through the resource
  clients built in dependencies.py.
"""
