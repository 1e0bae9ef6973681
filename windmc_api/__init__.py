"""HTTP surface, configuration and logging for the :mod:`windmc` engine."""
