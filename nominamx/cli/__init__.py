"""NominaMX CLI."""
