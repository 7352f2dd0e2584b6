"""In-memory key/tuple store with a threaded TCP server, a client and sample programs."""

__version__ = "0.1.0"