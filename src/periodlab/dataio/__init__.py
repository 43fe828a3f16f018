"""Data input/output helpers (CSV export, delivery and trace loading).

Utility modules here keep disk-level concerns isolated from the recorder:
- :mod:`export_csv` renders a session as the ``period_vs_time.csv`` document.
- :mod:`delivery` hands that document to a file, a stream or a callable.
- :mod:`trace_loader` reads displacement traces and previous exports.
- :mod:`file_paths` centralises where exports land.
"""
