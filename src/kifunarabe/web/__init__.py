"""HTTP boundary for the browser UI."""
