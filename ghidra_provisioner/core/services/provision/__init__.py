"""
Provisioning service — onion layers for one install run.

    data → domain → detection → execution → orchestration

Import from the layer modules directly; this package does not re-export.
"""
