"""
Festboard application package.

Layered the same way throughout:

  festboard/repositories/  — pure I/O: the JSON snapshot on disk.
  festboard/services/      — domain rules: catalog, ledger, leaderboard, sessions.

``festival_web.create_app`` is the integration point: it builds one
:class:`~festboard.repositories.SnapshotRepository` and hands it to each
service, so request handlers never touch module-level state.
"""
