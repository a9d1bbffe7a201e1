"""Host-facing contracts and runtime.

Composition:
    - `types`: message, attachment, action and plugin data contracts.
    - `runtime`: minimal agent runtime resolving settings and dispatching actions.

Determinism and side effects:
    Package import itself is side-effect free.
"""
