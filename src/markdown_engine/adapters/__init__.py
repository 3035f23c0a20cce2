"""Host adapters that put the engine behind a concrete UI."""
