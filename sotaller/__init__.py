"""Operating-systems workshop exercises: threads, semaphores, named pipes, signals, file I/O and the banker's algorithm."""

__version__ = "0.1.0"