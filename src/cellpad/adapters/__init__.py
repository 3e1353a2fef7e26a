"""Front-ends hosting an editing session."""
