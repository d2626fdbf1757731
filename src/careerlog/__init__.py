"""careerlog: turn git history into resume-ready achievements."""

__version__ = "0.1.0"
