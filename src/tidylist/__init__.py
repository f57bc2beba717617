"""tidylist: a small single-user task list with a local persisted slot."""

__version__ = "0.3.0"
