"""Built-in plugins registered by the CLI."""
