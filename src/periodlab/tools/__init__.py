"""Command-line tools built on the recorder.

:mod:`replay` feeds a pre-recorded displacement trace through a
:class:`~periodlab.core.controller.RecordingController` and exports the
resulting dataset, which is handy for checking period measurements offline.
"""
