"""
Test suite for the to-do API.

This package contains:
- unit/: store, hashing, tokens, models, services and auth guard in isolation
- integration/: every route through the Flask test client
- security/: ownership isolation, token tampering and mass assignment
- concurrency/: parallel access to the JSON store files
- contracts/: responses validated against the OpenAPI contract
- smoke/: checks against a live server
"""
