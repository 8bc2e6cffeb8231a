"""USD-BRL quote server and client with independently enforced deadlines."""

__version__ = "0.1.0"
