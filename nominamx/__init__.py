"""NominaMX - Mexican payroll calculations."""

__version__ = "0.1.0"
