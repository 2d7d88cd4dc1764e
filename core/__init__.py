"""Core guidance model, topic loading, dispatch, configuration and logging."""
