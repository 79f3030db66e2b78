"""Network topologies, routing strategies and packet simulation, with supporting algorithms."""

__version__ = "0.1.0"