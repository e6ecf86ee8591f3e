"""
Data types shared across the warden.

- **rule_datatypes.py**: ``RuleKind`` and the frozen ``Rule`` matcher.
- **membership_datatypes.py**: ``RoomMember`` snapshot entries and membership
  constants.
- **action_datatypes.py**: ``ActionType`` and the transient ``ActionDecision``.
- **error_datatypes.py**: ``ErrorKind`` and ``RoomUpdateError`` report entries.
- **reconcile_config.py**: immutable ``ReconcileConfig`` passed into the engine.
"""
