"""Weekly NFL odds report: implied win probabilities ranked by confidence gap."""

__version__ = "0.1.0"
