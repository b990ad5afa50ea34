"""Backend for a crowdsourced interview-question board."""

__version__ = "0.1.0"
