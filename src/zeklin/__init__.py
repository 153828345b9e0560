"""Run a benchmark in CI and upload its JSON results to Zeklin."""

__version__ = "0.1.0"
